"""
sweph.engines.date
------------------
Date engine: civil date <-> Julian Day (UT) <-> Ephemeris Time.

The engine only holds the configuration it was built with; all methods are
pure and may be called from several threads at once.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Union

from ..core.errors import InvalidDateError
from ..core.time import to_civil_date, to_julian_day
from ..core.types import Calendar, DateUT, EphemerisTime, JulianDay
from .deltat import DeltaTModel, delta_t

if TYPE_CHECKING:
    from ..config import SweConfig


class DateEngine:
    def __init__(self, config: "SweConfig"):
        self.config = config

    @property
    def delta_t_model(self) -> DeltaTModel:
        return self.config.delta_t_model

    def julian_day(
        self,
        date: Union[DateUT, int],
        month: Optional[int] = None,
        day: Optional[int] = None,
        hour: float = 0.0,
        minute: Optional[int] = None,
        second: Optional[int] = None,
        *,
        calendar: Optional[Calendar] = None,
    ) -> JulianDay:
        """
        Julian Day of a civil date, either a DateUT or its components:

            engine.julian_day(DateUT(2000, 1, 1, 12))
            engine.julian_day(2000, 1, 1, 12.5)          # fractional hour
            engine.julian_day(2000, 1, 1, 12, 30, 0)     # h, m, s
        """
        if isinstance(date, DateUT):
            return to_julian_day(date, calendar)
        if month is None or day is None:
            raise TypeError("julian_day() needs a DateUT or year, month and day")
        if minute is None and second is None:
            d = DateUT.from_hours(date, month, day, float(hour), calendar)
        else:
            if float(hour) != int(hour):
                raise InvalidDateError(f"hour {hour} must be whole when minute or second is given")
            d = DateUT(date, month, day, int(hour), minute or 0, second or 0, calendar)
        return to_julian_day(d, calendar)

    def delta_t(self, jd: Union[JulianDay, float]) -> float:
        """ΔT (ET - UT) in days with the configured model."""
        return delta_t(float(jd), self.delta_t_model)

    def ephemeris_time(self, jd: Union[JulianDay, float]) -> EphemerisTime:
        if not isinstance(jd, JulianDay):
            jd = JulianDay.from_value(jd)
        return EphemerisTime(jd, self.delta_t(jd))

    def date_ut(self, t: Union[JulianDay, EphemerisTime, float]) -> DateUT:
        """Civil date (UT); an EphemerisTime is first brought back to UT."""
        if isinstance(t, EphemerisTime):
            return to_civil_date(t.julian_day)
        return to_civil_date(t)

    def julian_day_from_et(self, et: Union[EphemerisTime, float], calendar: Optional[Calendar] = None) -> JulianDay:
        """
        Inverse of ephemeris_time() for a bare ET value.

        Solves jd_et = jd_ut + ΔT(jd_ut) by fixed-point iteration; ΔT
        changes slowly, so a few rounds settle well below a millisecond.
        """
        if isinstance(et, EphemerisTime):
            return et.julian_day
        jd_et = float(et)
        jd_ut = jd_et
        for _ in range(4):
            jd_ut = jd_et - self.delta_t(jd_ut)
        return JulianDay.from_value(jd_ut, calendar)
