"""
Length-prefixed text codecs.

Text framing follows the host engine's string convention:
- i32 count of character units, including a trailing terminator unit
- count units (1 byte each for narrow text, 2 bytes each for wide UTF-16LE)

An empty string is written as a bare count of 0 with no terminator.
"""

from typing import Tuple

from ..errors import TextEncodingError
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from .base import Codec


WIDE_ENCODING = 'utf-16-le'
NARROW_ENCODING = 'latin-1'


class WideText(str):
    """A string that was stored (and should be re-stored) as wide text."""


def _read_units(cursor: SaveCursor, count: int, wide: bool, encoding: str) -> str:
    unit = 2 if wide else 1
    start = cursor.position
    if count == 1:
        # empty text is stored as count 0, never as a bare terminator
        raise TextEncodingError("Empty text stored with a terminator", start)
    raw = cursor.read_fixed(count * unit)
    if raw[-unit:] != b'\x00' * unit:
        raise TextEncodingError(f"Text of {count} units is missing its terminator", start)
    try:
        return raw[:-unit].decode(WIDE_ENCODING if wide else encoding)
    except UnicodeDecodeError as e:
        raise TextEncodingError(f"Invalid {'wide' if wide else 'narrow'} text: {e.reason}", start + e.start) from e


def _encode_units(value: str, wide: bool, encoding: str, offset: int) -> Tuple[int, bytes]:
    """Return (unit count including terminator, encoded bytes including terminator)."""
    unit = 2 if wide else 1
    try:
        raw = value.encode(WIDE_ENCODING if wide else encoding)
    except UnicodeEncodeError as e:
        raise TextEncodingError(
            f"Cannot encode {value[e.start:e.end]!r} as {'wide' if wide else 'narrow'} text", offset
        ) from e
    raw += b'\x00' * unit
    return len(raw) // unit, raw


class Text(Codec):
    """
    Fixed-width text: always narrow or always wide.

    Args:
        wide: Store UTF-16LE code units instead of single bytes
        encoding: Narrow code page (ignored for wide text)
    """

    min_size = 4
    type_tag = "StrProperty"

    def __init__(self, wide: bool = False, encoding: str = NARROW_ENCODING):
        self.wide = wide
        self.encoding = encoding

    def decode(self, cursor: SaveCursor) -> str:
        start = cursor.position
        count, = cursor.unpack('i')
        if count < 0:
            raise TextEncodingError(f"Negative text length {count}", start)
        if count == 0:
            return ""
        return _read_units(cursor, count, self.wide, self.encoding)

    def encode(self, value: str, writer: SaveWriter):
        if not value:
            writer.pack('i', 0)
            return
        count, raw = _encode_units(value, self.wide, self.encoding, writer.position)
        writer.pack('i', count)
        writer.write(raw)

    def __repr__(self) -> str:
        return f"Text(wide={self.wide})"


class UnrealText(Codec):
    """
    Text whose width is carried by the sign of the count.

    Positive counts are narrow, negative counts are wide (-count UTF-16 units).
    Wide values decode to WideText so they are written back wide even when
    every character would fit the narrow code page. Plain str values are
    written narrow when possible and wide otherwise.
    """

    min_size = 4
    type_tag = "StrProperty"

    def __init__(self, encoding: str = NARROW_ENCODING):
        self.encoding = encoding

    def decode(self, cursor: SaveCursor) -> str:
        count, = cursor.unpack('i')
        if count == 0:
            return ""
        if count < 0:
            return WideText(_read_units(cursor, -count, True, self.encoding))
        return _read_units(cursor, count, False, self.encoding)

    def encode(self, value: str, writer: SaveWriter):
        if not value:
            writer.pack('i', 0)
            return

        offset = writer.position
        if isinstance(value, WideText):
            count, raw = _encode_units(value, True, self.encoding, offset)
            count = -count
        else:
            try:
                count, raw = _encode_units(value, False, self.encoding, offset)
            except TextEncodingError:
                count, raw = _encode_units(value, True, self.encoding, offset)
                count = -count

        writer.pack('i', count)
        writer.write(raw)


NARROW_TEXT = Text(wide=False)
WIDE_TEXT = Text(wide=True)
UNREAL_TEXT = UnrealText()
