"""
Version marker codec.

Every save starts with an i32 version. Only the exact version of the target
format generation is accepted; there is no negotiation between versions.
"""

from ..errors import UnsupportedVersion
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from .base import Codec


class VersionGate(Codec):
    """i32 that must equal `expected`."""

    min_size = 4
    type_tag = "IntProperty"

    def __init__(self, expected: int):
        self.expected = expected

    def decode(self, cursor: SaveCursor) -> int:
        start = cursor.position
        found, = cursor.unpack('i')
        if found != self.expected:
            raise UnsupportedVersion(found, [self.expected], start)
        return found

    def encode(self, value, writer: SaveWriter):
        # The canonical constant is written whatever the caller passes.
        writer.pack('i', self.expected)

    def __repr__(self) -> str:
        return f"VersionGate({self.expected})"
