"""Byte builders shared by the test modules."""

import struct


def i32(value: int) -> bytes:
    return struct.pack('<i', value)


def u32(value: int) -> bytes:
    return struct.pack('<I', value)


def f32(value: float) -> bytes:
    return struct.pack('<f', value)


def narrow(text: str) -> bytes:
    """Narrow text framing: count including terminator, then latin-1 units."""
    if not text:
        return i32(0)
    return i32(len(text) + 1) + text.encode('latin-1') + b'\x00'


def prop(name: str, type_tag: str, payload: bytes) -> bytes:
    """One tagged property."""
    return narrow(name) + narrow(type_tag) + i32(len(payload)) + payload


NONE = narrow("None")
