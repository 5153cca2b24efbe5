"""
Opaque fixed-size byte blocks.

Parts of the save layout are not understood. They are carried through as raw
bytes of a size fixed by the schema, never interpreted and never synthesized.
"""

from ..errors import PaddingSizeError
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from .base import Codec


class Padding(Codec):
    """N raw bytes preserved verbatim."""

    type_tag = "BlobProperty"

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Padding size must be non-negative, got {size}")
        self.size = size
        self.min_size = size

    def decode(self, cursor: SaveCursor) -> bytes:
        return cursor.read_fixed(self.size)

    def encode(self, value: bytes, writer: SaveWriter):
        if len(value) != self.size:
            raise PaddingSizeError(f"Opaque block must be {self.size} bytes, got {len(value)}", writer.position)
        writer.write(value)

    def __repr__(self) -> str:
        return f"Padding({self.size})"
