"""
Fixed star catalog in the Swiss Ephemeris text layout (sefstars.txt):

    name, nomenclature, equinox, RA h, m, s, Dec d, m, s,
    pm RA [mas/yr], pm Dec [mas/yr], radial velocity [km/s],
    parallax [mas], magnitude[, ...]

The file is legacy single-byte text; it is decoded with Windows-1252 unless
an explicit encoding is given, so names with accented letters come back
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.errors import StarNotFoundError
from ..files import decode_text


@dataclass(frozen=True)
class FixedStar:
    name: str
    designation: str
    equinox: str
    ra_deg: float
    dec_deg: float
    pm_ra: float
    pm_dec: float
    radial_velocity: float
    parallax: float
    magnitude: float


def _sexagesimal(d: str, m: str, s: str) -> float:
    sign = -1.0 if d.strip().startswith("-") else 1.0
    return sign * (abs(float(d)) + float(m) / 60.0 + float(s) / 3600.0)


def parse_line(line: str) -> Optional[FixedStar]:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    f = [x.strip() for x in line.split(",")]
    if len(f) < 14:
        raise ValueError(f"Malformed star record: {line!r}")
    return FixedStar(
        name=f[0],
        designation=f[1],
        equinox=f[2],
        ra_deg=15.0 * _sexagesimal(f[3], f[4], f[5]),
        dec_deg=_sexagesimal(f[6], f[7], f[8]),
        pm_ra=float(f[9]),
        pm_dec=float(f[10]),
        radial_velocity=float(f[11]),
        parallax=float(f[12]),
        magnitude=float(f[13]),
    )


def parse_catalog(data: bytes, encoding: Optional[str] = None) -> List[FixedStar]:
    text = decode_text(data, encoding)
    out: List[FixedStar] = []
    for line in text.splitlines():
        star = parse_line(line)
        if star is not None:
            out.append(star)
    return out


def find_star(stars: Sequence[FixedStar], query: str) -> FixedStar:
    """
    Lookup rules:
      "Aldebaran"  traditional name, case-insensitive
      ",alTau"     nomenclature name after a leading comma
      "3"          1-based position in the catalog
    """
    q = query.strip()
    if q.isdigit():
        i = int(q)
        if 1 <= i <= len(stars):
            return stars[i - 1]
        raise StarNotFoundError(query)
    if q.startswith(","):
        key = q[1:].strip().lower()
        for s in stars:
            if s.designation.lower() == key:
                return s
        raise StarNotFoundError(query)
    key = q.lower()
    for s in stars:
        if s.name.lower() == key:
            return s
    raise StarNotFoundError(query)
