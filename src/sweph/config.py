from __future__ import annotations

import copy
import os
from dataclasses import dataclass, replace
from typing import Optional

from .engines.deltat import DeltaTModel

DEFAULT_EPHEMERIS_FILE = "de421.bsp"
DEFAULT_STAR_FILE = "sefstars.txt"


@dataclass
class SweConfig:
    """
    Settings of one Sweph context.

    A context keeps its own deep copy (see clone()), so changing a config
    object after handing it to a context has no effect on that context.

    Environment overrides (read by from_env()):
      SWEPH_DELTAT_MODEL    "standard" or "espenak-meeus"
      SWEPH_ENCODING        codec for textual resources (default Windows-1252)
      SWEPH_EPHEMERIS_FILE  logical name of the SPK kernel
      SWEPH_STAR_FILE       logical name of the fixed star catalog
    """
    delta_t_model: DeltaTModel = DeltaTModel.STANDARD
    encoding: Optional[str] = None
    ephemeris_file: str = DEFAULT_EPHEMERIS_FILE
    star_file: str = DEFAULT_STAR_FILE

    def __post_init__(self) -> None:
        self.delta_t_model = DeltaTModel.parse(self.delta_t_model)

    @property
    def use_espenak_meeus_delta_t(self) -> bool:
        return self.delta_t_model is DeltaTModel.ESPENAK_MEEUS

    @use_espenak_meeus_delta_t.setter
    def use_espenak_meeus_delta_t(self, value: bool) -> None:
        self.delta_t_model = DeltaTModel.ESPENAK_MEEUS if value else DeltaTModel.STANDARD

    def clone(self) -> "SweConfig":
        return copy.deepcopy(self)

    @classmethod
    def from_env(cls, base: Optional["SweConfig"] = None) -> "SweConfig":
        cfg = base.clone() if base is not None else cls()
        model = os.environ.get("SWEPH_DELTAT_MODEL", "").strip()
        if model:
            cfg = replace(cfg, delta_t_model=DeltaTModel.parse(model))
        encoding = os.environ.get("SWEPH_ENCODING", "").strip()
        if encoding:
            cfg = replace(cfg, encoding=encoding)
        eph = os.environ.get("SWEPH_EPHEMERIS_FILE", "").strip()
        if eph:
            cfg = replace(cfg, ephemeris_file=eph)
        stars = os.environ.get("SWEPH_STAR_FILE", "").strip()
        if stars:
            cfg = replace(cfg, star_file=stars)
        return cfg
