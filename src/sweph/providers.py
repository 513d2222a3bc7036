"""
sweph.providers
---------------
Data providers resolve a logical resource name (e.g. "de421.bsp",
"sefstars.txt") to a readable binary stream, or None when they have nothing
under that name. Names are opaque: no path syntax is assumed.

Providers are not required to be thread-safe; a context calls them from
whichever thread triggered the request.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Mapping, Optional, Protocol


class DataProvider(Protocol):
    def resolve(self, name: str) -> Optional[BinaryIO]: ...


class EmptyDataProvider:
    """Provides nothing."""

    def resolve(self, name: str) -> Optional[BinaryIO]:
        return None


@dataclass
class MappingDataProvider:
    """In-memory provider over name -> bytes. Each request gets a fresh stream."""
    files: Dict[str, bytes] = field(default_factory=dict)

    @classmethod
    def of(cls, files: Mapping[str, bytes]) -> "MappingDataProvider":
        return cls(dict(files))

    def add(self, name: str, data: bytes) -> None:
        self.files[name] = bytes(data)

    def resolve(self, name: str) -> Optional[BinaryIO]:
        data = self.files.get(name)
        if data is None:
            return None
        return io.BytesIO(data)
