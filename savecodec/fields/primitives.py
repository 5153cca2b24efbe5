"""
Fixed-width primitive codecs.

All values are little-endian. Booleans are strict on encode (0 or 1) and
lenient on decode (any nonzero value is True).
"""

import struct

from ..errors import ValueOutOfRange
from ..parsers.base import SaveCursor, get_struct
from ..utils.binary import SaveWriter
from .base import Codec


class Primitive(Codec):
    """Integer or float stored with a single struct format character."""

    def __init__(self, fmt: str, type_tag: str):
        self.fmt = fmt
        self.type_tag = type_tag
        self.min_size = get_struct(fmt).size

    def decode(self, cursor: SaveCursor):
        return cursor.unpack(self.fmt)[0]

    def encode(self, value, writer: SaveWriter):
        try:
            writer.pack(self.fmt, value)
        except (struct.error, OverflowError) as e:
            raise ValueOutOfRange(f"{value!r} does not fit {self.type_tag}: {e}", writer.position) from e

    def __repr__(self) -> str:
        return f"Primitive({self.fmt!r}, {self.type_tag!r})"


class Bool(Codec):
    """Boolean stored as an unsigned integer of `width` bytes."""

    type_tag = "BoolProperty"

    def __init__(self, width: int = 1):
        self.fmt = {1: 'B', 4: 'I'}[width]
        self.min_size = width

    def decode(self, cursor: SaveCursor) -> bool:
        return cursor.unpack(self.fmt)[0] != 0

    def encode(self, value, writer: SaveWriter):
        writer.pack(self.fmt, 1 if value else 0)

    def __repr__(self) -> str:
        return f"Bool({self.min_size})"


I8 = Primitive('b', "Int8Property")
U8 = Primitive('B', "ByteProperty")
I16 = Primitive('h', "Int16Property")
U16 = Primitive('H', "UInt16Property")
I32 = Primitive('i', "IntProperty")
U32 = Primitive('I', "UInt32Property")
I64 = Primitive('q', "Int64Property")
U64 = Primitive('Q', "UInt64Property")
F32 = Primitive('f', "FloatProperty")
F64 = Primitive('d', "DoubleProperty")

BOOL = Bool(1)
BOOL32 = Bool(4)  # UBOOL, as written by the engine's own serializer
