"""Sequences, maps and opaque padding."""

import pytest

from helpers import i32, narrow, u32
from savecodec.errors import (
    DuplicateMapKey,
    PaddingSizeError,
    SequenceTooLarge,
    TruncatedSequence,
    UnexpectedEof,
)
from savecodec.fields import I32, NARROW_TEXT, Map, Padding, Sequence
from savecodec.parsers import SaveCursor
from savecodec.utils import SaveWriter


def encode(codec, value) -> bytes:
    writer = SaveWriter()
    codec.encode(value, writer)
    return writer.getvalue()


@pytest.mark.parametrize("values", [[], [7], [1, -2, 3, 2 ** 31 - 1]])
def test_sequence_round_trip(values) -> None:
    codec = Sequence(I32)
    data = encode(codec, values)

    assert data == u32(len(values)) + b"".join(i32(v) for v in values)
    decoded = codec.decode(SaveCursor(data))
    assert len(decoded) == len(values)
    assert decoded == values


def test_sequence_count_larger_than_input_is_truncated() -> None:
    data = u32(1000) + i32(1) + i32(2)

    with pytest.raises(TruncatedSequence) as excinfo:
        Sequence(I32).decode(SaveCursor(data))

    assert excinfo.value.count == 1000
    assert excinfo.value.offset == 0


def test_sequence_huge_count_fails_before_allocating() -> None:
    with pytest.raises(TruncatedSequence):
        Sequence(Padding(0)).decode(SaveCursor(u32(0xFFFFFFFF)))


def test_sequence_too_large_to_encode() -> None:
    class Huge:
        def __len__(self):
            return 2 ** 32

    with pytest.raises(SequenceTooLarge):
        encode(Sequence(I32), Huge())


def test_element_failure_is_reported_with_index() -> None:
    data = u32(2) + narrow("a") + i32(9) + b"ab" + b"\x00" * 4

    with pytest.raises(UnexpectedEof) as excinfo:
        Sequence(NARROW_TEXT).decode(SaveCursor(data))

    assert excinfo.value.path == "[1]"


def test_map_preserves_encoded_order() -> None:
    codec = Map(NARROW_TEXT, I32)
    data = u32(3) + narrow("zeta") + i32(1) + narrow("alpha") + i32(2) + narrow("mid") + i32(3)

    decoded = codec.decode(SaveCursor(data))

    assert list(decoded) == ["zeta", "alpha", "mid"]
    assert encode(codec, decoded) == data


def test_map_duplicate_key_is_rejected() -> None:
    data = u32(2) + narrow("k") + i32(1) + narrow("k") + i32(2)

    with pytest.raises(DuplicateMapKey) as excinfo:
        Map(NARROW_TEXT, I32).decode(SaveCursor(data))

    assert excinfo.value.path == "[1]"


def test_padding_is_passed_through_verbatim() -> None:
    raw = bytes([0xde, 0xad, 0xbe, 0xef, 0x00])
    codec = Padding(5)

    cursor = SaveCursor(raw + b"rest")
    block = codec.decode(cursor)

    assert block == raw
    assert cursor.position == 5
    assert encode(codec, block) == raw


def test_padding_missing_bytes_raise_unexpected_eof() -> None:
    with pytest.raises(UnexpectedEof):
        Padding(18).decode(SaveCursor(b"\x00" * 17))


def test_padding_of_wrong_size_is_not_encoded() -> None:
    with pytest.raises(PaddingSizeError):
        encode(Padding(4), b"\x00" * 3)


def test_zero_size_elements_count_as_one_byte() -> None:
    codec = Sequence(Padding(0))

    assert codec.decode(SaveCursor(u32(2) + b"\x00\x00")) == [b"", b""]
    with pytest.raises(TruncatedSequence):
        codec.decode(SaveCursor(u32(2) + b"\x00"))
