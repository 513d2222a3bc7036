from __future__ import annotations
import math
from typing import Optional, Tuple, Union

from .types import Calendar, DateUT, JulianDay

JD_J2000 = 2451545.0
DAYS_PER_JULIAN_YEAR = 365.25


def is_leap_year(year: int, calendar: Calendar) -> bool:
    return calendar.is_leap_year(year)

def days_in_month(year: int, month: int, calendar: Calendar) -> int:
    return calendar.days_in_month(year, month)

def date_to_jdn(year: int, month: int, day: int, calendar: Calendar) -> int:
    """Civil date -> Julian Day Number (the day starting at noon of that date)."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4
    if calendar is Calendar.GREGORIAN:
        return jdn - y2 // 100 + y2 // 400 - 32045
    return jdn - 32083

def jdn_to_date(jdn: int, calendar: Calendar) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of date_to_jdn."""
    if calendar is Calendar.GREGORIAN:
        a = jdn + 32044
        b = (4 * a + 3) // 146097
        c = a - (146097 * b) // 4
    else:
        b = 0
        c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day

def to_julian_day(date: DateUT, calendar: Optional[Calendar] = None) -> JulianDay:
    """
    Civil date (UT) -> JulianDay.

    Calendar precedence: explicit argument, then date.calendar, then the
    era default (Julian before 1582-10-15).
    """
    cal = calendar if calendar is not None else date.resolved_calendar
    if cal is not date.resolved_calendar:
        # Re-validate: Feb 29 may exist in one calendar only.
        DateUT(date.year, date.month, date.day, date.hour, date.minute, date.second, cal)
    jdn = date_to_jdn(date.year, date.month, date.day, cal)
    return JulianDay(jdn - 0.5 + date.hours / 24.0, cal)

def to_civil_date(jd: Union[JulianDay, float], calendar: Optional[Calendar] = None) -> DateUT:
    """
    JulianDay -> civil date (UT), rounded to the nearest second.

    Calendar precedence: explicit argument, then the JulianDay tag, then the
    era default for the raw value.
    """
    if isinstance(jd, JulianDay):
        value = jd.value
        cal = calendar if calendar is not None else jd.calendar
    else:
        value = float(jd)
        cal = calendar if calendar is not None else Calendar.for_jd(value)

    jdn = math.floor(value + 0.5)
    seconds = int(round((value + 0.5 - jdn) * 86400.0))
    if seconds >= 86400:
        jdn += 1
        seconds -= 86400
    year, month, day = jdn_to_date(jdn, cal)
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return DateUT(year, month, day, h, m, s, cal)

def year_decimal(jd: float) -> float:
    """Decimal year of a Julian Day, in Julian years counted from J2000.0."""
    return 2000.0 + (jd - JD_J2000) / DAYS_PER_JULIAN_YEAR

def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - JD_J2000) / 36525.0
