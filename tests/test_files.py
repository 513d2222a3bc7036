# tests/test_files.py

import io

import pytest

from sweph.files import DEFAULT_ENCODING, LoadFileHook, TraceHook, check_encoding, decode_text
from sweph.providers import EmptyDataProvider, MappingDataProvider


def test_no_subscribers_means_unavailable():
    hook = LoadFileHook()
    assert len(hook) == 0
    assert hook.request("seas_18.se1") is None

def test_single_subscriber_by_name():
    hook = LoadFileHook()
    payload = b"\x00\x01\x02"
    hook.subscribe(lambda e: io.BytesIO(payload) if e.file_name == "seas_18.se1" else None)
    assert hook.request("seas_18.se1").read() == payload
    assert hook.request("semo_18.se1") is None
    assert hook.request("SEAS_18.SE1") is None

def test_first_responder_wins():
    hook = LoadFileHook()
    calls = []

    def first(e):
        calls.append("first")
        return None

    def second(e):
        calls.append("second")
        return io.BytesIO(b"second")

    def third(e):
        calls.append("third")
        return io.BytesIO(b"third")

    for h in (first, second, third):
        hook.subscribe(h)

    assert hook.request("x").read() == b"second"
    assert calls == ["first", "second"]

def test_handler_may_set_event_file():
    hook = LoadFileHook()

    @hook.subscribe
    def handler(e):
        e.file = io.BytesIO(b"via event")

    assert hook.request("anything").read() == b"via event"

def test_unsubscribe_and_clear():
    hook = LoadFileHook()
    h = hook.subscribe(lambda e: io.BytesIO(b"a"))
    hook.unsubscribe(h)
    assert hook.request("a") is None
    hook.subscribe(lambda e: io.BytesIO(b"b"))
    hook.subscribe(lambda e: io.BytesIO(b"c"))
    assert len(hook) == 2
    hook.clear()
    assert len(hook) == 0

def test_subscriber_errors_propagate():
    hook = LoadFileHook()

    def broken(e):
        raise OSError("disk on fire")

    hook.subscribe(broken)
    with pytest.raises(OSError):
        hook.request("de421.bsp")

def test_trace_hook_fanout():
    hook = TraceHook()
    seen_a, seen_b = [], []
    hook.emit("nobody listens")
    hook.subscribe(lambda e: seen_a.append(e.message))
    hook.subscribe(lambda e: seen_b.append(e.message))
    hook.emit("hello")
    assert seen_a == seen_b == ["hello"]

def test_empty_provider():
    assert EmptyDataProvider().resolve("de421.bsp") is None

def test_mapping_provider_fresh_streams():
    p = MappingDataProvider.of({"sefstars.txt": b"abc"})
    s1 = p.resolve("sefstars.txt")
    assert s1.read() == b"abc"
    s1.close()
    assert p.resolve("sefstars.txt").read() == b"abc"
    assert p.resolve("missing") is None
    p.add("new.bin", bytearray(b"xyz"))
    assert p.resolve("new.bin").read() == b"xyz"

def test_default_encoding_is_windows_1252():
    assert DEFAULT_ENCODING == "cp1252"
    assert check_encoding() == "cp1252"
    assert check_encoding(None) == "cp1252"
    assert b"\x80".decode(check_encoding()) == "€"
    assert "Algénib".encode("cp1252").decode(check_encoding()) == "Algénib"

def test_explicit_encoding():
    assert check_encoding("latin-1") == "iso8859-1"
    assert check_encoding("UTF8") == "utf-8"

def test_unknown_encoding():
    with pytest.raises(LookupError):
        check_encoding("no-such-codec")

def test_decode_text_passes_undefined_windows_1252_bytes():
    raw = b"A\x81B\x8d\x8f\x90\x9d\x80\xe9"
    text = decode_text(raw)
    assert text == "A\u0081B\u008d\u008f\u0090\u009d€é"
    assert decode_text(raw, "windows-1252") == text
    undefined = {0x81, 0x8D, 0x8F, 0x90, 0x9D}
    back = b"".join(
        bytes([ord(c)]) if ord(c) in undefined else c.encode("cp1252") for c in text
    )
    assert back == raw

def test_decode_text_other_codecs_are_strict():
    assert decode_text("Algénib".encode("utf-8"), "utf-8") == "Algénib"
    with pytest.raises(UnicodeDecodeError):
        decode_text(b"\x81", "utf-8")
