"""
sweph.ephemeris.library
-----------------------
The ephemeris engine a context wires up. It never touches storage itself:
every file it needs (the SPK kernel, the star catalog) is requested by
logical name through `on_load_file`, which the owning context points at its
file provisioning hook. A None answer means "file unavailable"; the engine
then raises EphemerisFileNotFoundError for the computation that needed it
and keeps working for everything that does not.

Positions are geometric (no light-time, aberration, precession or nutation),
referred to the mean ecliptic and equinox of J2000. They are geocentric, or
topocentric once an observer has been set with set_topo(): the observer is
placed on the WGS84 ellipsoid and turned with Greenwich mean sidereal time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from . import require_ephemeris
from .stars import FixedStar, find_star, parse_catalog
from ..core.errors import EphemerisError, EphemerisFileNotFoundError, UnknownPlanetError
from ..core.time import JD_J2000, T_centuries
from ..core.types import Planet
from ..engines.deltat import delta_t

if TYPE_CHECKING:
    from ..config import SweConfig

logger = logging.getLogger(__name__)

AU_KM = 149597870.7
EPS_J2000_DEG = 23.439291111

# WGS84 ellipsoid
EARTH_RADIUS_KM = 6378.137
EARTH_FLATTENING = 1.0 / 298.257223563
# Earth rotation, radians per UT day
EARTH_ROTATION = 2.0 * math.pi * 1.00273781191135448

# SPK (center, target) segments summed to get a solar-system-barycentric state.
BARYCENTRIC_CHAINS: Dict[Planet, Tuple[Tuple[int, int], ...]] = {
    Planet.SUN: ((0, 10),),
    Planet.MOON: ((0, 3), (3, 301)),
    Planet.MERCURY: ((0, 1),),
    Planet.VENUS: ((0, 2),),
    Planet.MARS: ((0, 4),),
    Planet.JUPITER: ((0, 5),),
    Planet.SATURN: ((0, 6),),
    Planet.URANUS: ((0, 7),),
    Planet.NEPTUNE: ((0, 8),),
    Planet.PLUTO: ((0, 9),),
    Planet.EARTH: ((0, 3), (3, 399)),
}

LoadFileCallback = Callable[[str], Optional[BinaryIO]]


def _equator_to_ecliptic() -> np.ndarray:
    eps = math.radians(EPS_J2000_DEG)
    c, s = math.cos(eps), math.sin(eps)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, s],
        [0.0, -s, c],
    ])

_ROT_ECL = _equator_to_ecliptic()


def open_kernel(stream: BinaryIO):
    """Open an SPK kernel from a binary stream (jplephem)."""
    require_ephemeris()
    from jplephem.daf import DAF
    from jplephem.spk import SPK
    try:
        return SPK(DAF(stream))
    except ValueError as e:
        raise EphemerisError(f"Not a readable SPK kernel: {e}") from e


@dataclass(frozen=True)
class Position:
    """Geocentric ecliptic J2000 coordinates; speeds are per day."""
    longitude: float       # deg [0, 360)
    latitude: float        # deg
    distance: float        # AU
    longitude_speed: float
    latitude_speed: float
    distance_speed: float

    def as_array(self) -> np.ndarray:
        return np.array([
            self.longitude, self.latitude, self.distance,
            self.longitude_speed, self.latitude_speed, self.distance_speed,
        ])


@dataclass(frozen=True)
class Topo:
    longitude: float  # deg east
    latitude: float   # deg
    height: float     # m above sea level

    def geocentric(self, gmst_deg: float) -> Tuple[np.ndarray, np.ndarray]:
        """Observer position (km) and velocity (km/day), equatorial frame."""
        phi = math.radians(self.latitude)
        e2 = EARTH_FLATTENING * (2.0 - EARTH_FLATTENING)
        sin_phi, cos_phi = math.sin(phi), math.cos(phi)
        n = EARTH_RADIUS_KM / math.sqrt(1.0 - e2 * sin_phi * sin_phi)
        h = self.height / 1000.0
        rho = (n + h) * cos_phi
        z = (n * (1.0 - e2) + h) * sin_phi
        theta = math.radians(gmst_deg + self.longitude)
        x, y = rho * math.cos(theta), rho * math.sin(theta)
        return np.array([x, y, z]), np.array([-EARTH_ROTATION * y, EARTH_ROTATION * x, 0.0])


def spherical(pos: np.ndarray, vel: np.ndarray) -> Position:
    """Cartesian position/velocity (AU, AU/day) -> spherical with daily speeds."""
    x, y, z = (float(v) for v in pos)
    vx, vy, vz = (float(v) for v in vel)
    rho2 = x * x + y * y
    rho = math.sqrt(rho2)
    r = math.sqrt(rho2 + z * z)
    if r == 0.0:
        raise EphemerisError("Degenerate position vector")
    rdot = (x * vx + y * vy + z * vz) / r
    lon = math.degrees(math.atan2(y, x)) % 360.0
    lat = math.degrees(math.atan2(z, rho))
    if rho == 0.0:
        lon_speed = lat_speed = 0.0
    else:
        lon_speed = math.degrees((x * vy - y * vx) / rho2)
        lat_speed = math.degrees((vz * r - z * rdot) / (r * rho))
    return Position(lon, lat, r, lon_speed, lat_speed, rdot)


class EphemerisLibrary:
    def __init__(self, config: "SweConfig"):
        self.config = config
        self.on_load_file: Optional[LoadFileCallback] = None
        self._kernel = None
        self._stars: Optional[List[FixedStar]] = None
        self._topo: Optional[Topo] = None
        self._closed = False

    # ------------------------------------------------------------
    # Files
    # ------------------------------------------------------------
    def load_file(self, name: str) -> Optional[BinaryIO]:
        cb = self.on_load_file
        if cb is None:
            return None
        return cb(name)

    def _check_open(self) -> None:
        if self._closed:
            raise EphemerisError("Ephemeris engine has been closed")

    @property
    def kernel(self):
        self._check_open()
        if self._kernel is None:
            name = self.config.ephemeris_file
            stream = self.load_file(name)
            if stream is None:
                raise EphemerisFileNotFoundError(name)
            self._kernel = open_kernel(stream)
            logger.debug("Opened ephemeris kernel %s", name)
        return self._kernel

    @property
    def stars(self) -> List[FixedStar]:
        self._check_open()
        if self._stars is None:
            name = self.config.star_file
            stream = self.load_file(name)
            if stream is None:
                raise EphemerisFileNotFoundError(name)
            try:
                data = stream.read()
            finally:
                stream.close()
            self._stars = parse_catalog(data, self.config.encoding)
            logger.debug("Loaded %d fixed stars from %s", len(self._stars), name)
        return self._stars

    # ------------------------------------------------------------
    # Computations
    # ------------------------------------------------------------
    def _barycentric(self, planet: Planet, tjd_et: float) -> Tuple[np.ndarray, np.ndarray]:
        chain = BARYCENTRIC_CHAINS.get(planet)
        if chain is None:
            raise UnknownPlanetError(f"Body {planet!r} is not computed by this engine")
        kernel = self.kernel
        pos = np.zeros(3)
        vel = np.zeros(3)
        for pair in chain:
            try:
                segment = kernel[pair]
            except KeyError:
                raise UnknownPlanetError(
                    f"Kernel '{self.config.ephemeris_file}' has no segment {pair} for {planet!r}"
                ) from None
            p, v = segment.compute_and_differentiate(tjd_et)
            pos = pos + np.asarray(p)
            vel = vel + np.asarray(v)
        return pos, vel

    def calc(self, tjd_et: float, planet: Union[Planet, int]) -> Position:
        """Geocentric (or topocentric, see set_topo) position of `planet` at `tjd_et` (ET)."""
        try:
            planet = Planet(planet)
        except ValueError:
            raise UnknownPlanetError(f"Unknown body id {planet}") from None
        if planet is Planet.EARTH:
            raise UnknownPlanetError("Geocentric position of the Earth is undefined")
        tjd_et = float(tjd_et)
        p_body, v_body = self._barycentric(planet, tjd_et)
        p_earth, v_earth = self._barycentric(Planet.EARTH, tjd_et)
        p, v = p_body - p_earth, v_body - v_earth
        if self._topo is not None:
            tjd_ut = tjd_et - delta_t(tjd_et, self.config.delta_t_model)
            p_obs, v_obs = self._topo.geocentric(15.0 * self.sidtime(tjd_ut))
            p, v = p - p_obs, v - v_obs
        # km, km/day -> AU, AU/day, ecliptic frame
        pos = _ROT_ECL @ (p / AU_KM)
        vel = _ROT_ECL @ (v / AU_KM)
        return spherical(pos, vel)

    def sidtime(self, tjd_ut: float) -> float:
        """Greenwich mean sidereal time in hours (IAU 1982)."""
        jd = float(tjd_ut)
        T = T_centuries(jd)
        gmst = (280.46061837 + 360.98564736629 * (jd - JD_J2000)
                + 0.000387933 * T * T - (T * T * T) / 38710000.0)
        return (gmst % 360.0) / 15.0

    def set_topo(self, geolon: float, geolat: float, height: float = 0.0) -> None:
        if not (-90.0 <= geolat <= 90.0):
            raise ValueError(f"latitude {geolat} out of range [-90, 90]")
        self._topo = Topo(float(geolon), float(geolat), float(height))

    def clear_topo(self) -> None:
        self._topo = None

    @property
    def topo(self) -> Optional[Topo]:
        return self._topo

    def fixstar(self, star: str) -> FixedStar:
        """Catalog entry of a fixed star, coordinates as stored in the catalog."""
        return find_star(self.stars, star)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        kernel, self._kernel = self._kernel, None
        if kernel is not None:
            kernel.close()
        self._stars = None
        self.on_load_file = None
        logger.debug("Ephemeris engine closed")

    @property
    def closed(self) -> bool:
        return self._closed
