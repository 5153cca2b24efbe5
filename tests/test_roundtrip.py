"""Round trip comparison."""

import pytest

from helpers import i32, u32
from savecodec import FormatGeneration, RoundTripError, find_mismatch, verify_round_trip
from savecodec.fields import BOOL, I32, Record
from savecodec.utils import crc32_bzip2


def test_equal_inputs_have_no_mismatch() -> None:
    assert find_mismatch(b"", b"") is None
    assert find_mismatch(b"abcdefgh", b"abcdefgh") is None


def test_mismatch_is_reported_at_chunk_start() -> None:
    expected = bytes(range(16))
    actual = bytearray(expected)
    actual[9] = 0xFF

    mismatch = find_mismatch(expected, bytes(actual))

    assert mismatch.offset == 8
    assert mismatch.expected == bytes([8, 9, 10, 11])
    assert mismatch.actual == bytes([8, 0xFF, 10, 11])


def test_length_difference_is_reported_at_end_of_shorter() -> None:
    mismatch = find_mismatch(b"abcdefgh", b"abcdefghij")

    assert mismatch.offset == 8
    assert mismatch.expected == b""
    assert mismatch.actual == b"ij"


def test_ignore_footer_skips_checksums() -> None:
    body = b"abcdefgh"

    assert find_mismatch(body + u32(1), body + u32(2)).offset == 8
    assert find_mismatch(body + u32(1), body + u32(2), ignore_footer=True) is None


def test_verify_round_trip_returns_output() -> None:
    generation = FormatGeneration("pair", 59, Record("Pair", [("a", I32), ("b", I32)]))
    body = i32(59) + i32(1) + i32(2)
    data = body + u32(crc32_bzip2(body))

    assert verify_round_trip(data, generation=generation) == data


def test_stale_footer_fails_round_trip() -> None:
    generation = FormatGeneration("pair", 59, Record("Pair", [("a", I32), ("b", I32)]))
    data = i32(59) + i32(1) + i32(2) + u32(0)

    with pytest.raises(RoundTripError) as excinfo:
        verify_round_trip(data, generation=generation)

    assert excinfo.value.mismatch.offset == 12
    assert verify_round_trip(data, generation=generation, ignore_footer=True)[:12] == data[:12]


def test_non_canonical_bool_fails_round_trip() -> None:
    generation = FormatGeneration("flag", 59, Record("Flag", [("flag", BOOL)]), checksum=False)
    data = i32(59) + b"\x02"

    with pytest.raises(RoundTripError) as excinfo:
        verify_round_trip(data, generation=generation)

    assert excinfo.value.mismatch.offset == 4
