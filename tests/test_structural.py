"""Records and variants."""

from enum import IntEnum

import pytest

from helpers import f32, i32, narrow, u32
from savecodec.errors import MissingField, UnexpectedEof, UnknownDiscriminant, ValueOutOfRange
from savecodec.fields import F32, I32, NARROW_TEXT, Record, RecordValue, Sequence, Variant
from savecodec.parsers import SaveCursor
from savecodec.utils import SaveWriter


class Difficulty(IntEnum):
    NARRATIVE = 0
    CASUAL = 1
    NORMAL = 2
    HARDCORE = 3
    INSANITY = 4


class Shape(IntEnum):
    NONE = 0
    CIRCLE = 1


def encode(codec, value) -> bytes:
    writer = SaveWriter()
    codec.encode(value, writer)
    return writer.getvalue()


LEVEL = Record("Level", [("name", NARROW_TEXT)])
OUTER = Record("Outer", [
    ("inner", Record("Inner", [("levels", Sequence(LEVEL))])),
])


def test_record_fields_follow_declaration_order() -> None:
    codec = Record("Timestamp", [("day", I32), ("month", I32), ("year", I32)])
    data = i32(14) + i32(3) + i32(2186)

    value = codec.decode(SaveCursor(data))

    assert isinstance(value, RecordValue)
    assert list(value.items()) == [("day", 14), ("month", 3), ("year", 2186)]
    assert encode(codec, value) == data
    assert encode(codec, {"year": 2186, "month": 3, "day": 14}) == data


def test_record_min_size_sums_fields() -> None:
    codec = Record("Vector", [("x", F32), ("y", F32), ("z", F32)])
    assert codec.min_size == 12


def test_record_rejects_duplicate_field_names() -> None:
    with pytest.raises(ValueError):
        Record("Broken", [("a", I32), ("a", F32)])


def test_nested_failure_reports_field_path() -> None:
    data = u32(2) + narrow("a") + i32(5) + b"ab"

    with pytest.raises(UnexpectedEof) as excinfo:
        OUTER.decode(SaveCursor(data))

    assert excinfo.value.path == "inner.levels[1].name"
    assert excinfo.value.offset == 14
    assert "at inner.levels[1].name" in str(excinfo.value)


def test_missing_field_on_encode() -> None:
    codec = Record("Pair", [("a", I32), ("b", I32)])

    with pytest.raises(MissingField):
        encode(codec, {"a": 1})


def test_variant_round_trip() -> None:
    codec = Variant(Difficulty)

    for member in Difficulty:
        data = encode(codec, member)
        assert data == u32(member.value)
        assert codec.decode(SaveCursor(data)) is member


def test_unmapped_discriminant_fails() -> None:
    with pytest.raises(UnknownDiscriminant) as excinfo:
        Variant(Difficulty).decode(SaveCursor(u32(0xFFFFFFFF)))

    assert excinfo.value.value == 0xFFFFFFFF
    assert excinfo.value.offset == 0


def test_variant_with_payload() -> None:
    codec = Variant(Shape, {Shape.CIRCLE: F32})

    circle = encode(codec, (Shape.CIRCLE, 2.5))
    assert circle == u32(1) + f32(2.5)
    assert codec.decode(SaveCursor(circle)) == (Shape.CIRCLE, 2.5)

    empty = encode(codec, Shape.NONE)
    assert empty == u32(0)
    assert codec.decode(SaveCursor(empty)) is Shape.NONE


def test_variant_payload_case_requires_payload() -> None:
    with pytest.raises(MissingField):
        encode(Variant(Shape, {Shape.CIRCLE: F32}), Shape.CIRCLE)


def test_variant_rejects_foreign_member() -> None:
    with pytest.raises(ValueOutOfRange):
        encode(Variant(Difficulty), Shape.CIRCLE)


def test_variant_table_rejects_duplicate_discriminants() -> None:
    class Aliased(IntEnum):
        FIRST = 0
        SECOND = 0

    with pytest.raises(ValueError):
        Variant(Aliased)


def test_variant_table_rejects_negative_discriminants() -> None:
    class Negative(IntEnum):
        BELOW = -1

    with pytest.raises(ValueError):
        Variant(Negative)
