"""sweph public API.

Keep this surface small: users should mostly work through a Sweph context.
"""

from .config import SweConfig
from .context import ContextState, Sweph
from .core.errors import (
    DisposedError,
    EphemerisError,
    EphemerisFileNotFoundError,
    InvalidDateError,
    StarNotFoundError,
    SwephError,
    UnknownPlanetError,
)
from .core.time import to_civil_date, to_julian_day
from .core.types import Calendar, DateUT, EphemerisTime, JulianDay, Planet
from .engines.deltat import DeltaTModel, delta_t, delta_t_seconds
from .files import LoadFileEvent, TraceEvent, check_encoding, decode_text
from .providers import DataProvider, EmptyDataProvider, MappingDataProvider

__all__ = [
    "Sweph",
    "ContextState",
    "SweConfig",
    "Calendar",
    "DateUT",
    "JulianDay",
    "EphemerisTime",
    "Planet",
    "DeltaTModel",
    "delta_t",
    "delta_t_seconds",
    "to_julian_day",
    "to_civil_date",
    "DataProvider",
    "EmptyDataProvider",
    "MappingDataProvider",
    "LoadFileEvent",
    "TraceEvent",
    "check_encoding",
    "decode_text",
    "SwephError",
    "InvalidDateError",
    "DisposedError",
    "EphemerisError",
    "EphemerisFileNotFoundError",
    "UnknownPlanetError",
    "StarNotFoundError",
]
