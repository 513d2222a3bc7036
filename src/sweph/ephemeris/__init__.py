"""Ephemeris engine used by a Sweph context.

Reading JPL SPK kernels needs the optional extra:
  pip install "sweph[ephemeris]"
"""

def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "sweph[ephemeris]"') from e
