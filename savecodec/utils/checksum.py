"""
CRC32 (BZIP2 variant)

Save files end in a CRC-32/BZIP2 footer: polynomial 0x04C11DB7, initial value
0xFFFFFFFF, no input/output reflection, final XOR 0xFFFFFFFF.

zlib implements the reflected CRC-32 with the same polynomial. Feeding it the
bit-reversed bytes and bit-reversing the result yields the non-reflected
BZIP2 value, so the byte-wise work stays in C.
"""

import zlib
from typing import Union

import numpy as np


def _build_reverse_table() -> np.ndarray:
    values = np.arange(256, dtype=np.uint8)
    reversed_values = np.zeros(256, dtype=np.uint8)
    for bit in range(8):
        reversed_values |= ((values >> bit) & 1) << (7 - bit)
    return reversed_values


_REVERSED_BYTES = _build_reverse_table()


def _reverse32(value: int) -> int:
    return int(f"{value:032b}"[::-1], 2)


def crc32_bzip2(data: Union[bytes, bytearray, memoryview]) -> int:
    """
    Compute the CRC-32/BZIP2 of data.

    Args:
        data: Bytes to checksum

    Returns:
        Unsigned 32-bit checksum
    """
    if not data:
        # init and final XOR cancel out
        return 0
    mirrored = _REVERSED_BYTES[np.frombuffer(data, dtype=np.uint8)].tobytes()
    return _reverse32(zlib.crc32(mirrored))
