from __future__ import annotations
import operator
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Optional, Union

from .errors import InvalidDateError

# Supported span of astronomical years (year 0 = 1 BC).
MIN_YEAR = -13200
MAX_YEAR = 17191

# First Gregorian day: 1582-10-15 (JD 2299160.5 at midnight UT).
GREGORIAN_REFORM_DATE = (1582, 10, 15)
GREGORIAN_REFORM_JD = 2299160.5

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class Calendar(Enum):
    JULIAN = "julian"
    GREGORIAN = "gregorian"

    @classmethod
    def for_date(cls, year: int, month: int, day: int) -> "Calendar":
        """Era default: Julian before 1582-10-15, Gregorian from then on."""
        if (year, month, day) < GREGORIAN_REFORM_DATE:
            return cls.JULIAN
        return cls.GREGORIAN

    @classmethod
    def for_jd(cls, jd: float) -> "Calendar":
        return cls.JULIAN if jd < GREGORIAN_REFORM_JD else cls.GREGORIAN

    def is_leap_year(self, year: int) -> bool:
        if self is Calendar.JULIAN:
            return year % 4 == 0
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    def days_in_month(self, year: int, month: int) -> int:
        if month == 2 and self.is_leap_year(year):
            return 29
        return _MONTH_DAYS[month - 1]


@dataclass(frozen=True)
class DateUT:
    """
    Civil date and time in Universal Time.

    `calendar` may be left as None, in which case the era default applies
    (see Calendar.for_date). Leap seconds are not represented: UT here is a
    uniform day of 86400 seconds.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    calendar: Optional[Calendar] = None

    def __post_init__(self) -> None:
        for name in ("year", "month", "day", "hour", "minute", "second"):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, operator.index(value))
            except TypeError:
                raise InvalidDateError(f"{name} must be an integer, got {value!r}") from None
        if not (MIN_YEAR <= self.year <= MAX_YEAR):
            raise InvalidDateError(f"year {self.year} outside supported span [{MIN_YEAR}, {MAX_YEAR}]")
        if not (1 <= self.month <= 12):
            raise InvalidDateError(f"month {self.month} out of range 1..12")
        n = self.resolved_calendar.days_in_month(self.year, self.month)
        if not (1 <= self.day <= n):
            raise InvalidDateError(f"day {self.day} out of range 1..{n} for {self.year}-{self.month:02d}")
        if not (0 <= self.hour <= 23):
            raise InvalidDateError(f"hour {self.hour} out of range 0..23")
        if not (0 <= self.minute <= 59):
            raise InvalidDateError(f"minute {self.minute} out of range 0..59")
        if not (0 <= self.second <= 59):
            raise InvalidDateError(f"second {self.second} out of range 0..59")

    @classmethod
    def from_hours(
        cls,
        year: int,
        month: int,
        day: int,
        hours: float,
        calendar: Optional[Calendar] = None,
    ) -> "DateUT":
        """
        Build a date from a fractional hour, rounded to the nearest second.
        A rounding carry into 24:00:00 rolls over to the next day.
        """
        if not (0.0 <= hours < 24.0):
            raise InvalidDateError(f"hour {hours} out of range [0, 24)")
        seconds = int(round(hours * 3600.0))
        if seconds < 86400:
            h, rem = divmod(seconds, 3600)
            m, s = divmod(rem, 60)
            return cls(year, month, day, h, m, s, calendar)

        # Validate the day itself before rolling over.
        start = cls(year, month, day, 0, 0, 0, calendar)
        from .time import date_to_jdn, jdn_to_date

        cal = start.resolved_calendar
        y2, m2, d2 = jdn_to_date(date_to_jdn(year, month, day, cal) + 1, cal)
        return cls(y2, m2, d2, 0, 0, 0, calendar)

    @property
    def resolved_calendar(self) -> Calendar:
        if self.calendar is not None:
            return self.calendar
        return Calendar.for_date(self.year, self.month, self.day)

    @property
    def hours(self) -> float:
        return self.hour + self.minute / 60.0 + self.second / 3600.0

    def __str__(self) -> str:
        return (f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                f"{self.hour:02d}:{self.minute:02d}:{self.second:02d} UT")


@total_ordering
@dataclass(frozen=True, eq=False)
class JulianDay:
    """
    A Julian Day in UT, tagged with the calendar it was derived with.

    Comparison and hashing only look at `value`: the calendar tag records
    how the day was obtained, not what instant it denotes.
    """
    value: float
    calendar: Calendar = field(default=Calendar.GREGORIAN)

    @classmethod
    def from_value(cls, value: float, calendar: Optional[Calendar] = None) -> "JulianDay":
        value = float(value)
        return cls(value, calendar if calendar is not None else Calendar.for_jd(value))

    @classmethod
    def from_date(cls, date: DateUT, calendar: Optional[Calendar] = None) -> "JulianDay":
        from .time import to_julian_day
        return to_julian_day(date, calendar)

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JulianDay):
            return self.value == other.value
        return NotImplemented

    def __lt__(self, other: "JulianDay") -> bool:
        if isinstance(other, JulianDay):
            return self.value < other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


@total_ordering
@dataclass(frozen=True, eq=False)
class EphemerisTime:
    """
    An instant in Ephemeris (dynamical) Time.

    `delta_t` is ET - UT in days, so value == julian_day.value + delta_t.
    """
    julian_day: JulianDay
    delta_t: float

    @property
    def value(self) -> float:
        return self.julian_day.value + self.delta_t

    @property
    def delta_t_seconds(self) -> float:
        return self.delta_t * 86400.0

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EphemerisTime):
            return self.value == other.value
        return NotImplemented

    def __lt__(self, other: "EphemerisTime") -> bool:
        if isinstance(other, EphemerisTime):
            return self.value < other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)


class Planet(IntEnum):
    SUN = 0
    MOON = 1
    MERCURY = 2
    VENUS = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8
    PLUTO = 9
    MEAN_NODE = 10
    TRUE_NODE = 11
    MEAN_APOG = 12
    OSCU_APOG = 13
    EARTH = 14
    CHIRON = 15


JulianDayLike = Union[JulianDay, float]
