"""
Binary Output Utilities

Append-only writer used by every field codec on the encode path.
"""

from typing import Union

from ..parsers.base import get_struct


class SaveWriter:
    """
    Growable output buffer for encoding.

    Backed by a single bytearray so appends are amortised; fields never copy
    what was written before them.
    """

    def __init__(self):
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        """Offset the next write will land at."""
        return len(self._buffer)

    def write(self, data: Union[bytes, bytearray, memoryview]):
        self._buffer += data

    def pack(self, fmt: str, *values):
        """Append values packed with a little-endian struct format."""
        self._buffer += get_struct(fmt).pack(*values)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def getbuffer(self) -> memoryview:
        """View of the bytes written so far. Release it before writing again."""
        return memoryview(self._buffer)


def write_property_header(writer: SaveWriter, name_bytes: bytes, tag_bytes: bytes, size: int):
    """
    Write the framing of a tagged property whose name and tag are already encoded.

    Tagged property format:
    - Text name
    - Text type tag
    - i32 payload size
    - [payload size bytes of data]
    """
    writer.write(name_bytes)
    writer.write(tag_bytes)
    writer.pack('i', size)
