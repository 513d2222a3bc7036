"""
sweph.context
-------------
The Sweph context owns one date engine, one data provider, one planet
catalogue and one ephemeris engine, created together on first use and
released together on dispose().

Lifecycle:

    UNINITIALIZED --first engine access--> INITIALIZED --dispose()--> DISPOSED

Initialization runs at most once, even when several threads hit a fresh
context at the same time. Engines are published as their factories return,
so a factory may read the engines built before it (the date engine is
always first). A disposed context stays dead: every accessor
raises DisposedError. dispose() itself may be called any number of times.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import BinaryIO, Optional, Union

from .config import SweConfig
from .core.errors import DisposedError
from .core.types import Calendar, DateUT, EphemerisTime, JulianDay, Planet
from .engines.date import DateEngine
from .engines.planets import PlanetEngine
from .ephemeris.library import EphemerisLibrary, Position
from .ephemeris.stars import FixedStar
from .files import LoadFileHook, TraceHook, check_encoding
from .providers import DataProvider, EmptyDataProvider

logger = logging.getLogger(__name__)


class ContextState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DISPOSED = "disposed"


class Sweph:
    """
    Swiss-Ephemeris style engine container.

    `config` is copied on entry; later changes to the caller's object do not
    reach this context. `data_provider`, when given, answers file requests
    that no `on_load_file` subscriber answered.

    Subclasses may override the create_* factories to swap any engine.
    """

    VERSION = "2.00.00"

    def __init__(self, config: Optional[SweConfig] = None, *, data_provider: Optional[DataProvider] = None):
        self.config = config.clone() if config is not None else SweConfig()
        self.on_load_file = LoadFileHook()
        self.on_trace = TraceHook()
        self._provider_arg = data_provider
        self._lock = threading.RLock()
        self._state = ContextState.UNINITIALIZED
        self._initializing = False
        self._date: Optional[DateEngine] = None
        self._data_provider: Optional[DataProvider] = None
        self._planets: Optional[PlanetEngine] = None
        self._ephemeris: Optional[EphemerisLibrary] = None

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------
    @property
    def state(self) -> ContextState:
        return self._state

    def _ensure_initialized(self) -> None:
        if self._state is ContextState.INITIALIZED:
            return
        with self._lock:
            if self._state is ContextState.DISPOSED:
                raise DisposedError("Sweph context has been disposed")
            if self._initializing:
                # Reentry from a factory on the initializing thread.
                return
            if self._state is ContextState.UNINITIALIZED:
                self._initializing = True
                try:
                    self._initialize()
                except BaseException:
                    self._date = self._data_provider = None
                    self._planets = self._ephemeris = None
                    raise
                finally:
                    self._initializing = False
                self._state = ContextState.INITIALIZED

    def _initialize(self) -> None:
        logger.debug("Initializing Sweph context (ΔT model: %s)", self.config.delta_t_model.value)
        self._date = self.create_date_engine()
        self._data_provider = self.create_data_provider()
        self._planets = self.create_planet_engine()
        self._ephemeris = self.create_ephemeris()
        self._ephemeris.on_load_file = self._provide_file

    def dispose(self) -> None:
        """Release the ephemeris engine, then the date engine and data provider."""
        with self._lock:
            if self._state is ContextState.DISPOSED:
                return
            was_initialized = self._state is ContextState.INITIALIZED
            self._state = ContextState.DISPOSED
            ephemeris, self._ephemeris = self._ephemeris, None
            provider, self._data_provider = self._data_provider, None
            self._date = None
            self._planets = None
        if ephemeris is not None:
            ephemeris.close()
        close = getattr(provider, "close", None)
        if callable(close):
            close()
        if was_initialized:
            logger.debug("Sweph context disposed")

    close = dispose

    def __enter__(self) -> "Sweph":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # ------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------
    def create_date_engine(self) -> DateEngine:
        return DateEngine(self.config)

    def create_data_provider(self) -> DataProvider:
        if self._provider_arg is not None:
            return self._provider_arg
        return EmptyDataProvider()

    def create_planet_engine(self) -> PlanetEngine:
        return PlanetEngine(self.config)

    def create_ephemeris(self) -> EphemerisLibrary:
        return EphemerisLibrary(self.config)

    # ------------------------------------------------------------
    # Engines
    # ------------------------------------------------------------
    @property
    def date(self) -> DateEngine:
        self._ensure_initialized()
        return self._date

    @property
    def data_provider(self) -> DataProvider:
        self._ensure_initialized()
        return self._data_provider

    @property
    def planets(self) -> PlanetEngine:
        self._ensure_initialized()
        return self._planets

    @property
    def ephemeris(self) -> EphemerisLibrary:
        self._ensure_initialized()
        return self._ephemeris

    @property
    def encoding(self) -> str:
        return check_encoding(self.config.encoding)

    # ------------------------------------------------------------
    # Files & trace
    # ------------------------------------------------------------
    def load_file(self, file_name: str) -> Optional[BinaryIO]:
        """
        Stream for `file_name`, or None when nobody can provide it.
        Subscribers of on_load_file are asked first, then the data provider.
        """
        self._ensure_initialized()
        return self._request_file(file_name)

    def _provide_file(self, file_name: str) -> Optional[BinaryIO]:
        # Collaborator side: once disposed, requests still in flight get None.
        if self._state is ContextState.DISPOSED:
            return None
        return self._request_file(file_name)

    def _request_file(self, file_name: str) -> Optional[BinaryIO]:
        stream = self.on_load_file.request(file_name)
        if stream is None:
            provider = self._data_provider
            if provider is not None:
                stream = provider.resolve(file_name)
        if stream is None:
            logger.debug("File %s not available", file_name)
        else:
            logger.debug("File %s provided", file_name)
        return stream

    def trace(self, fmt: str, *args: object) -> None:
        message = fmt % args if args else fmt
        logger.debug(message)
        self.on_trace.emit(message)

    # ------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------
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
        return self.date.julian_day(date, month, day, hour, minute, second, calendar=calendar)

    def delta_t(self, jd: Union[JulianDay, float]) -> float:
        return self.date.delta_t(jd)

    def ephemeris_time(self, jd: Union[JulianDay, float]) -> EphemerisTime:
        return self.date.ephemeris_time(jd)

    def date_ut(self, t: Union[JulianDay, EphemerisTime, float]) -> DateUT:
        return self.date.date_ut(t)

    # ------------------------------------------------------------
    # Ephemeris proxies
    # ------------------------------------------------------------
    def set_topo(self, geolon: float, geolat: float, height: float = 0.0) -> None:
        self.ephemeris.set_topo(geolon, geolat, height)

    def clear_topo(self) -> None:
        self.ephemeris.clear_topo()

    def calc(self, tjd_et: Union[EphemerisTime, float], planet: Union[Planet, int]) -> Position:
        return self.ephemeris.calc(float(tjd_et), planet)

    def sidtime(self, tjd_ut: Union[JulianDay, float]) -> float:
        return self.ephemeris.sidtime(float(tjd_ut))

    def fixstar(self, star: str) -> FixedStar:
        return self.ephemeris.fixstar(star)

    def planet_name(self, planet: Union[Planet, int]) -> str:
        return self.planets.name(planet)
