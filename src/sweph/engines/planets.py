from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Union

from ..core.errors import UnknownPlanetError
from ..core.types import Planet

if TYPE_CHECKING:
    from ..config import SweConfig

PLANET_NAMES: Dict[Planet, str] = {
    Planet.SUN: "Sun",
    Planet.MOON: "Moon",
    Planet.MERCURY: "Mercury",
    Planet.VENUS: "Venus",
    Planet.MARS: "Mars",
    Planet.JUPITER: "Jupiter",
    Planet.SATURN: "Saturn",
    Planet.URANUS: "Uranus",
    Planet.NEPTUNE: "Neptune",
    Planet.PLUTO: "Pluto",
    Planet.MEAN_NODE: "mean Node",
    Planet.TRUE_NODE: "true Node",
    Planet.MEAN_APOG: "mean Apogee",
    Planet.OSCU_APOG: "osc. Apogee",
    Planet.EARTH: "Earth",
    Planet.CHIRON: "Chiron",
}


class PlanetEngine:
    """Planet catalogue of a context."""

    def __init__(self, config: "SweConfig"):
        self.config = config

    def name(self, planet: Union[Planet, int]) -> str:
        try:
            return PLANET_NAMES[Planet(planet)]
        except ValueError:
            return f"planet {int(planet)}"

    def lookup(self, name: str) -> Planet:
        """Planet by display name, case-insensitive."""
        key = name.strip().lower()
        for planet, label in PLANET_NAMES.items():
            if label.lower() == key or planet.name.lower() == key:
                return planet
        raise UnknownPlanetError(f"Unknown planet '{name}'")
