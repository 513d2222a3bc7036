"""
sweph.engines.deltat
--------------------
ΔT = ET - UT, the correction between Universal Time (Earth rotation) and the
uniform Ephemeris/Dynamical time scale.

Two interchangeable models, selected through SweConfig.delta_t_model:

- STANDARD: the Morrison & Stephenson long-term parabola before 1620, the
  historical ΔT table (Meeus, Astronomical Algorithms ch. 10, extended with
  IERS values) from 1620 to 2024, and linear extrapolation of the table trend
  afterwards.
- ESPENAK_MEEUS: the NASA Five Millennium Canon piecewise polynomials
  (Espenak & Meeus 2006).

Both are pure functions of the Julian Day. Neither is continuous to better
than the precision of its source tables at segment boundaries; extrapolation
outside the tabulated range is a loss of accuracy, never an error.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Protocol, Tuple, Union

from ..core.time import year_decimal

SECONDS_PER_DAY = 86400.0


class DeltaTModel(str, Enum):
    STANDARD = "standard"
    ESPENAK_MEEUS = "espenak-meeus"

    @classmethod
    def parse(cls, name: Union[str, "DeltaTModel"]) -> "DeltaTModel":
        if isinstance(name, DeltaTModel):
            return name
        key = name.lower().strip().replace("_", "-")
        if key in ("alternate", "em2006"):
            return cls.ESPENAK_MEEUS
        for m in cls:
            if m.value == key:
                return m
        raise ValueError(f"Unknown ΔT model '{name}'. Available: {[m.value for m in cls]}")


class DeltaTAlgorithm(Protocol):
    """ΔT in seconds as a function of the decimal year."""
    def delta_t_seconds(self, year: float) -> float: ...
    def info(self) -> Dict[str, object]: ...


def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


@dataclass(frozen=True)
class TableDeltaT:
    """
    Table of (year_decimal -> ΔT seconds), with piecewise linear interpolation.

    Outside the knots the nearest segment's trend is extended; `trend_span`
    widens the baseline used for the slope at either end, so that the last
    few (noisy) knots do not dominate the extrapolation.
    """
    knots: Tuple[Tuple[float, float], ...]  # sorted by year_decimal: (x, y)
    trend_span: int = 1

    def __post_init__(self) -> None:
        xs = [x for x, _ in self.knots]
        if len(xs) < 2:
            raise ValueError("ΔT table needs at least two knots")
        for i in range(1, len(xs)):
            if not (xs[i] > xs[i - 1]):
                raise ValueError("ΔT table x is not strictly increasing")

    @property
    def range(self) -> Tuple[float, float]:
        return (self.knots[0][0], self.knots[-1][0])

    def _slope(self, i: int, j: int) -> float:
        (x0, y0), (x1, y1) = self.knots[i], self.knots[j]
        return (y1 - y0) / (x1 - x0)

    def delta_t_seconds(self, year: float) -> float:
        xs = self.knots
        n = min(self.trend_span, len(xs) - 1)
        if year < xs[0][0]:
            return xs[0][1] + (year - xs[0][0]) * self._slope(0, n)
        if year >= xs[-1][0]:
            return xs[-1][1] + (year - xs[-1][0]) * self._slope(-1 - n, -1)
        # binary search for interval
        lo, hi = 0, len(xs) - 1
        while lo + 1 < hi:
            mid = (lo + hi) // 2
            if xs[mid][0] <= year:
                lo = mid
            else:
                hi = mid
        x0, y0 = xs[lo]
        x1, y1 = xs[lo + 1]
        t = (year - x0) / (x1 - x0)
        return (1.0 - t) * y0 + t * y1

    def info(self) -> Dict[str, object]:
        return {"type": "table_linear", "n": len(self.knots), "min": self.knots[0][0], "max": self.knots[-1][0]}


# ΔT in seconds every two years, 1620.0 - 2024.0.
_HISTORIC_TABLE = (
    # 1620
    121.0, 112.0, 103.0, 95.0, 88.0, 82.0, 77.0, 72.0, 68.0, 63.0,
    60.0, 56.0, 53.0, 51.0, 48.0, 46.0, 44.0, 42.0, 40.0, 38.0,
    # 1660
    35.0, 33.0, 31.0, 29.0, 26.0, 24.0, 22.0, 20.0, 18.0, 16.0,
    14.0, 12.0, 11.0, 10.0, 9.0, 8.0, 7.0, 7.0, 7.0, 7.0,
    # 1700
    7.0, 7.0, 8.0, 8.0, 9.0, 9.0, 9.0, 9.0, 9.0, 10.0,
    10.0, 10.0, 10.0, 10.0, 10.0, 10.0, 10.0, 11.0, 11.0, 11.0,
    # 1740
    11.0, 11.0, 12.0, 12.0, 12.0, 12.0, 13.0, 13.0, 13.0, 14.0,
    14.0, 14.0, 14.0, 15.0, 15.0, 15.0, 15.0, 15.0, 16.0, 16.0,
    # 1780
    16.0, 16.0, 16.0, 16.0, 16.0, 16.0, 15.0, 15.0, 14.0, 13.0,
    13.1, 12.5, 12.2, 12.0, 12.0, 12.0, 12.0, 12.0, 12.0, 11.9,
    # 1820
    11.6, 11.0, 10.2, 9.2, 8.2, 7.1, 6.2, 5.6, 5.4, 5.3,
    5.4, 5.6, 5.9, 6.2, 6.5, 6.8, 7.1, 7.3, 7.5, 7.6,
    # 1860
    7.7, 7.3, 6.2, 5.2, 2.7, 1.4, -1.2, -2.8, -3.8, -4.8,
    -5.5, -5.3, -5.6, -5.7, -5.9, -6.0, -6.3, -6.5, -6.2, -4.7,
    # 1900
    -2.8, -0.1, 2.6, 5.3, 7.7, 10.4, 13.3, 16.0, 18.2, 20.2,
    21.1, 22.4, 23.5, 23.8, 24.3, 24.0, 23.9, 23.9, 23.7, 24.0,
    # 1940
    24.3, 25.3, 26.2, 27.3, 28.2, 29.1, 30.0, 30.7, 31.4, 32.2,
    33.1, 34.0, 35.0, 36.5, 38.3, 40.2, 42.2, 44.5, 46.5, 48.5,
    # 1980
    50.5, 52.2, 53.8, 54.9, 55.8, 56.9, 58.3, 60.0, 61.6, 63.0,
    63.8, 64.3, 64.6, 64.8, 65.5, 66.1, 66.6, 67.3, 68.1, 68.8,
    # 2020
    69.4, 69.2, 69.2,
)

HISTORIC_TABLE = TableDeltaT(
    knots=tuple((1620.0 + 2.0 * i, v) for i, v in enumerate(_HISTORIC_TABLE)),
    trend_span=5,
)


@dataclass(frozen=True)
class StandardDeltaT:
    """
    The historical table from 1620 on; before it the Morrison & Stephenson
    (2004) long-term parabola ΔT = -20 + 32 u², u = (y - 1820) / 100.

    Over the `blend_years` preceding the table the parabola is shifted
    linearly so that both meet at the first knot.
    """
    table: TableDeltaT = HISTORIC_TABLE
    blend_years: float = 100.0

    @staticmethod
    def _parabola(year: float) -> float:
        u = (year - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u

    def delta_t_seconds(self, year: float) -> float:
        start, _ = self.table.range
        if year >= start:
            return self.table.delta_t_seconds(year)
        dt = self._parabola(year)
        w = 1.0 - (start - year) / self.blend_years
        if w > 0.0:
            dt += w * (self.table.delta_t_seconds(start) - self._parabola(start))
        return dt

    def info(self) -> Dict[str, object]:
        return {"type": "standard", "table": self.table.info(), "blend_years": self.blend_years}

@dataclass(frozen=True)
class EspenakMeeusDeltaT:
    """
    Espenak–Meeus piecewise polynomial ΔT(y) in seconds.

    The branch polynomials match those published by NASA for the Five
    Millennium Canon of Solar Eclipses.

    apply_correction_c:
        If True, apply the lunar-secular-acceleration correction
        c = -0.000012932 (y-1955)^2 outside 1955..2005.
    """
    apply_correction_c: bool = False

    def delta_t_seconds(self, year: float) -> float:
        y = year
        if y < -500.0:
            u = (y - 1820.0) / 100.0
            dt = -20.0 + 32.0 * u * u
        elif y < 500.0:
            u = y / 100.0
            dt = _poly(u, (10583.6, -1014.41, 33.78311, -5.952053,
                           -0.1798452, 0.022174192, 0.0090316521))
        elif y < 1600.0:
            u = (y - 1000.0) / 100.0
            dt = _poly(u, (1574.2, -556.01, 71.23472, 0.319781,
                           -0.8503463, -0.005050998, 0.0083572073))
        elif y < 1700.0:
            t = y - 1600.0
            dt = 120.0 - 0.9808 * t - 0.01532 * t * t + (t ** 3) / 7129.0
        elif y < 1800.0:
            t = y - 1700.0
            dt = 8.83 + 0.1603 * t - 0.0059285 * t * t + 0.00013336 * (t ** 3) - (t ** 4) / 1174000.0
        elif y < 1860.0:
            t = y - 1800.0
            dt = _poly(t, (13.72, -0.332447, 0.0068612, 0.0041116,
                           -0.00037436, 0.0000121272, -0.0000001699, 0.000000000875))
        elif y < 1900.0:
            t = y - 1860.0
            dt = 7.62 + 0.5737 * t - 0.251754 * (t ** 2) + 0.01680668 * (t ** 3) - 0.0004473624 * (t ** 4) + (t ** 5) / 233174.0
        elif y < 1920.0:
            t = y - 1900.0
            dt = -2.79 + 1.494119 * t - 0.0598939 * (t ** 2) + 0.0061966 * (t ** 3) - 0.000197 * (t ** 4)
        elif y < 1941.0:
            t = y - 1920.0
            dt = 21.20 + 0.84493 * t - 0.076100 * (t ** 2) + 0.0020936 * (t ** 3)
        elif y < 1961.0:
            t = y - 1950.0
            dt = 29.07 + 0.407 * t - (t ** 2) / 233.0 + (t ** 3) / 2547.0
        elif y < 1986.0:
            t = y - 1975.0
            dt = 45.45 + 1.067 * t - (t ** 2) / 260.0 - (t ** 3) / 718.0
        elif y < 2005.0:
            t = y - 2000.0
            dt = _poly(t, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
        elif y < 2050.0:
            t = y - 2000.0
            dt = 62.92 + 0.32217 * t + 0.005589 * (t ** 2)
        elif y < 2150.0:
            u = (y - 1820.0) / 100.0
            dt = -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - y)
        else:
            u = (y - 1820.0) / 100.0
            dt = -20.0 + 32.0 * u * u

        if self.apply_correction_c and (y < 1955.0 or y > 2005.0):
            dt += -0.000012932 * (y - 1955.0) ** 2
        return float(dt)

    def info(self) -> Dict[str, object]:
        return {"type": "espenak_meeus_2006", "correction_c": self.apply_correction_c}


_MODELS: Dict[DeltaTModel, DeltaTAlgorithm] = {
    DeltaTModel.STANDARD: StandardDeltaT(),
    DeltaTModel.ESPENAK_MEEUS: EspenakMeeusDeltaT(),
}

def get_model(model: Union[str, DeltaTModel] = DeltaTModel.STANDARD) -> DeltaTAlgorithm:
    return _MODELS[DeltaTModel.parse(model)]

def delta_t_seconds(jd: float, model: Union[str, DeltaTModel] = DeltaTModel.STANDARD) -> float:
    """ΔT in seconds at Julian Day `jd` (UT)."""
    return get_model(model).delta_t_seconds(year_decimal(float(jd)))

def delta_t(jd: float, model: Union[str, DeltaTModel] = DeltaTModel.STANDARD) -> float:
    """ΔT in days at Julian Day `jd` (UT)."""
    return delta_t_seconds(jd, model) / SECONDS_PER_DAY
