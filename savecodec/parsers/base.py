"""
Base cursor for save file decoding.

This module provides the forward-only reader shared by every field codec:
- SaveCursor: bounded reader over an immutable byte buffer
- STRUCTS: cached struct.Struct instances for the fixed-width formats

Decoding is strictly sequential. The cursor never seeks backwards; a field
either consumes exactly the bytes it needs or raises UnexpectedEof without
moving.
"""

import struct
from typing import Dict, Tuple

from ..errors import UnexpectedEof


STRUCTS: Dict[str, struct.Struct] = {}


def get_struct(fmt: str) -> struct.Struct:
    """Return a cached little-endian struct for a format string like 'I' or '3f'."""
    cached = STRUCTS.get(fmt)
    if cached is None:
        cached = struct.Struct('<' + fmt)
        STRUCTS[fmt] = cached
    return cached


class SaveCursor:
    """
    Forward-only reader over save file bytes.

    Usage:
        cursor = SaveCursor(data)
        version, = cursor.unpack('i')
        name_len, = cursor.unpack('I')
        raw = cursor.read_fixed(name_len)
    """

    def __init__(self, data: bytes, base_offset: int = 0):
        """
        Initialize cursor.

        Args:
            data: Bytes to read from (held, never copied or mutated)
            base_offset: Absolute offset of data[0] in the file, used for
                         error reporting by sub-cursors
        """
        self._data = bytes(data)
        self._pos = 0
        self._base = base_offset

    @property
    def position(self) -> int:
        """Absolute offset of the next byte to be read."""
        return self._base + self._pos

    @property
    def remaining(self) -> int:
        """Number of bytes remaining to be read."""
        return len(self._data) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read_fixed(self, width: int) -> bytes:
        """
        Read exactly `width` bytes.

        Raises:
            UnexpectedEof: If fewer than `width` bytes remain. The position
                           is left unchanged.
        """
        if width < 0:
            raise ValueError(f"Negative read width {width}")
        end = self._pos + width
        if end > len(self._data):
            raise UnexpectedEof(self.position, width, self.remaining)
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> Tuple:
        """Read and unpack a little-endian struct format."""
        packer = get_struct(fmt)
        return packer.unpack(self.read_fixed(packer.size))

    def sub_cursor(self, width: int) -> 'SaveCursor':
        """
        Consume `width` bytes and return a cursor bounded to them.

        Offsets reported by the sub-cursor stay absolute.
        """
        start = self.position
        return SaveCursor(self.read_fixed(width), base_offset=start)

    def preceding(self) -> bytes:
        """All bytes of this buffer before the current position."""
        return self._data[:self._pos]
