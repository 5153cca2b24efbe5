"""
Checksum footer codec.

The footer is a u32 CRC-32/BZIP2 of every byte written before it. On encode
the value is always recomputed; the value held in a decoded save is ignored.
On decode the stored value is read and returned without comparison unless
the caller asks for verification.
"""

from typing import Optional

from ..errors import ChecksumMismatch
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from ..utils.checksum import crc32_bzip2
from ..utils.logging import logDebug
from .base import Codec


class ChecksumFooter(Codec):
    """Trailing CRC over all preceding bytes of the same buffer."""

    min_size = 4
    type_tag = "UInt32Property"

    def __init__(self, verify: bool = False):
        self.verify = verify

    def decode(self, cursor: SaveCursor) -> int:
        start = cursor.position
        preceding = cursor.preceding() if self.verify else b""
        stored, = cursor.unpack('I')
        if self.verify:
            computed = crc32_bzip2(preceding)
            if computed != stored:
                raise ChecksumMismatch(stored, computed, start)
            logDebug(f"Checksum 0x{stored:08X} verified over {len(preceding):,} bytes")
        return stored

    def encode(self, value: Optional[int], writer: SaveWriter):
        with writer.getbuffer() as written:
            checksum = crc32_bzip2(written)
        writer.pack('I', checksum)

    def __repr__(self) -> str:
        return f"ChecksumFooter(verify={self.verify})"
