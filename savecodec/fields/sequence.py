"""
Length-prefixed collections.

Format:
- u32 element count
- [count elements, each encoded by the element codec, in order]

Ordered maps use the same framing over (key, value) pairs. Order is part of
the byte layout, so maps decode into insertion-ordered dicts.
"""

from typing import Any, Callable, Dict, List

from ..errors import DuplicateMapKey, SaveCodecError, SequenceTooLarge, TruncatedSequence
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from .base import Codec


MAX_COUNT = 0xFFFFFFFF


def read_count(cursor: SaveCursor, min_element_size: int) -> int:
    """
    Read an element count and check the remaining bytes can hold it.

    Elements are assumed to take at least one byte, so a corrupt count can
    never drive an unbounded allocation loop.
    """
    start = cursor.position
    count, = cursor.unpack('I')
    min_bytes = count * max(min_element_size, 1)
    if min_bytes > cursor.remaining:
        raise TruncatedSequence(count, min_bytes, cursor.remaining, start)
    return count


def write_count(writer: SaveWriter, count: int):
    if count > MAX_COUNT:
        raise SequenceTooLarge(count)
    writer.pack('I', count)


def decode_items(cursor: SaveCursor, count: int, read_item: Callable[[SaveCursor], Any]) -> List[Any]:
    """Decode `count` items, tagging any failure with the item index."""
    items = []
    for i in range(count):
        try:
            items.append(read_item(cursor))
        except SaveCodecError as e:
            e.add_path(f"[{i}]")
            raise
    return items


def decode_pairs(cursor: SaveCursor, count: int,
                 read_key: Callable[[SaveCursor], Any],
                 read_value: Callable[[SaveCursor], Any]) -> Dict[Any, Any]:
    """Decode `count` key/value pairs into a dict in encoded order."""
    result = {}
    for i in range(count):
        start = cursor.position
        try:
            key = read_key(cursor)
            if key in result:
                raise DuplicateMapKey(f"Duplicate map key {key!r}", start)
            result[key] = read_value(cursor)
        except SaveCodecError as e:
            e.add_path(f"[{i}]")
            raise
    return result


class Sequence(Codec):
    """
    Ordered list of elements sharing one codec.

    Decode treats every element as at least one byte when checking the count
    against the remaining input, so a sequence of zero-size elements (such as
    Padding(0)) cannot hold more elements than there are bytes left.
    """

    min_size = 4
    type_tag = "ArrayProperty"

    def __init__(self, element: Codec):
        self.element = element

    def decode(self, cursor: SaveCursor) -> List[Any]:
        count = read_count(cursor, self.element.min_size)
        return decode_items(cursor, count, self.element.decode)

    def encode(self, value: List[Any], writer: SaveWriter):
        write_count(writer, len(value))
        for i, item in enumerate(value):
            try:
                self.element.encode(item, writer)
            except SaveCodecError as e:
                e.add_path(f"[{i}]")
                raise

    def accept(self, visitor, value, path: list):
        return visitor.visit_sequence(self, value, path)

    def __repr__(self) -> str:
        return f"Sequence({self.element!r})"


class Map(Codec):
    """Ordered key/value map."""

    min_size = 4
    type_tag = "MapProperty"

    def __init__(self, key: Codec, value: Codec):
        self.key = key
        self.value = value

    def decode(self, cursor: SaveCursor) -> Dict[Any, Any]:
        count = read_count(cursor, self.key.min_size + self.value.min_size)
        return decode_pairs(cursor, count, self.key.decode, self.value.decode)

    def encode(self, value: Dict[Any, Any], writer: SaveWriter):
        write_count(writer, len(value))
        for i, (k, v) in enumerate(value.items()):
            try:
                self.key.encode(k, writer)
                self.value.encode(v, writer)
            except SaveCodecError as e:
                e.add_path(f"[{i}]")
                raise

    def accept(self, visitor, value, path: list):
        return visitor.visit_map(self, value, path)

    def __repr__(self) -> str:
        return f"Map({self.key!r}, {self.value!r})"
