class SwephError(Exception):
    """Base error."""

class InvalidDateError(SwephError, ValueError):
    """Raised when civil date components are out of range."""

class DisposedError(SwephError, RuntimeError):
    """Raised when a disposed context is used again."""

class EphemerisError(SwephError):
    """Raised by the ephemeris engine when a computation cannot be done."""

class EphemerisFileNotFoundError(EphemerisError):
    """Raised when a required ephemeris file could not be provided."""

    def __init__(self, file_name: str):
        super().__init__(f"Ephemeris file '{file_name}' not available")
        self.file_name = file_name

class UnknownPlanetError(EphemerisError, KeyError):
    """Raised when a body is not covered by the loaded ephemeris."""

class StarNotFoundError(EphemerisError, KeyError):
    """Raised when a star is not in the fixed star catalog."""
