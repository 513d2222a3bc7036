"""
sweph.files
-----------
File provisioning indirection and trace notifications.

When the ephemeris engine needs a named file it calls back into its context,
which raises a LoadFileEvent on `Sweph.on_load_file`. Subscribers are asked
in registration order; the first stream supplied wins and later subscribers
are not called. With no subscriber the answer is None ("file unavailable").

The hooks run synchronously in the caller's thread, and subscribers are
responsible for their own thread safety.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional

DEFAULT_ENCODING = "cp1252"

# Windows-1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D undefined; they decode to
# the C1 control with the same number so legacy files survive unchanged.
C1_PASSTHROUGH = "sweph.c1-passthrough"


def _c1_passthrough(exc: UnicodeError):
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    raw = exc.object[exc.start:exc.end]
    if any(not 0x80 <= b <= 0x9F for b in raw):
        raise exc
    return "".join(chr(b) for b in raw), exc.end

codecs.register_error(C1_PASSTHROUGH, _c1_passthrough)


def check_encoding(encoding: Optional[str] = None) -> str:
    """
    Codec for textual ephemeris resources: Windows-1252 unless overridden.
    Unknown codecs raise LookupError.
    """
    return codecs.lookup(encoding or DEFAULT_ENCODING).name


def decode_text(data: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode a textual resource. Windows-1252 (the default) keeps its five
    unassigned bytes as U+0081, U+008D, U+008F, U+0090 and U+009D; other
    codecs decode strictly.
    """
    codec = check_encoding(encoding)
    if codec == "cp1252":
        return data.decode(codec, errors=C1_PASSTHROUGH)
    return data.decode(codec)


@dataclass
class LoadFileEvent:
    file_name: str
    file: Optional[BinaryIO] = None


LoadFileHandler = Callable[[LoadFileEvent], Optional[BinaryIO]]


class LoadFileHook:
    """Ordered list of load-file subscribers."""

    def __init__(self) -> None:
        self._handlers: List[LoadFileHandler] = []

    def subscribe(self, handler: LoadFileHandler) -> LoadFileHandler:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: LoadFileHandler) -> None:
        self._handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def request(self, file_name: str) -> Optional[BinaryIO]:
        """
        Ask subscribers for `file_name`. A handler may set `event.file` or
        return the stream; either counts as an answer.
        """
        if not self._handlers:
            return None
        event = LoadFileEvent(file_name)
        for handler in list(self._handlers):
            stream = handler(event)
            if stream is not None:
                event.file = stream
            if event.file is not None:
                break
        return event.file


@dataclass(frozen=True)
class TraceEvent:
    message: str


TraceHandler = Callable[[TraceEvent], None]


class TraceHook:
    def __init__(self) -> None:
        self._handlers: List[TraceHandler] = []

    def subscribe(self, handler: TraceHandler) -> TraceHandler:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: TraceHandler) -> None:
        self._handlers.remove(handler)

    def __len__(self) -> int:
        return len(self._handlers)

    def emit(self, message: str) -> None:
        if not self._handlers:
            return
        event = TraceEvent(message)
        for handler in list(self._handlers):
            handler(event)
