"""
Round Trip Verification

Decoding and re-encoding a save must reproduce its bytes exactly. These
helpers locate the first differing 4-byte chunk so a failure points at an
offset instead of a bare "not equal".
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .constants import CHECKSUM_SIZE, COMPARE_CHUNK_SIZE
from .errors import RoundTripError
from .formats import FormatGeneration, FormatRegistry
from .save_file import decode, encode


@dataclass
class Mismatch:
    """First differing chunk between two byte strings."""
    offset: int
    expected: bytes
    actual: bytes


def find_mismatch(expected: bytes, actual: bytes, ignore_footer: bool = False) -> Optional[Mismatch]:
    """
    Compare two byte strings chunk by chunk.

    Args:
        expected: Reference bytes (usually the original file)
        actual: Bytes to check (usually the re-encoded file)
        ignore_footer: Skip the trailing checksum of both inputs

    Returns:
        The first mismatching chunk, or None if the inputs are equal. When one
        input is a prefix of the other, the mismatch is reported at the end
        of the shorter one.
    """
    if ignore_footer:
        expected = expected[:max(len(expected) - CHECKSUM_SIZE, 0)]
        actual = actual[:max(len(actual) - CHECKSUM_SIZE, 0)]

    common = min(len(expected), len(actual))
    differing = np.empty(0, dtype=np.intp)
    if common:
        a = np.frombuffer(expected, dtype=np.uint8, count=common)
        b = np.frombuffer(actual, dtype=np.uint8, count=common)
        differing = np.flatnonzero(a != b)

    if differing.size:
        first = int(differing[0])
        offset = first - first % COMPARE_CHUNK_SIZE
    elif len(expected) != len(actual):
        offset = common - common % COMPARE_CHUNK_SIZE
    else:
        return None

    end = offset + COMPARE_CHUNK_SIZE
    return Mismatch(offset=offset, expected=bytes(expected[offset:end]), actual=bytes(actual[offset:end]))


def verify_round_trip(data: bytes,
                      generation: Union[FormatGeneration, str, None] = None,
                      registry: Optional[FormatRegistry] = None,
                      ignore_footer: bool = False) -> bytes:
    """
    Decode then encode `data` and require the result to match.

    Returns:
        The re-encoded bytes

    Raises:
        RoundTripError: Carrying the first Mismatch
        SaveCodecError: If decoding or encoding itself fails
    """
    save = decode(data, generation=generation, registry=registry)
    output = encode(save)
    mismatch = find_mismatch(data, output, ignore_footer=ignore_footer)
    if mismatch is not None:
        raise RoundTripError(mismatch)
    return output
