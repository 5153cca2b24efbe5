"""
Tagged Property Codec

Self-describing body layout used by tagged format generations. Records are
written as property lists instead of positional field runs:

Property list format:
- per property:
  - Text name
  - Text type tag (IntProperty, StrProperty, StructProperty, ...)
  - i32 payload size
  - [payload size bytes]
- Text "None" terminator (no tag, no size)

Payloads:
- leaves (primitives, text, padding): their positional bytes
- StructProperty: a nested property list
- ArrayProperty / MapProperty: u32 count, then elements encoded the same way
- EnumProperty: u32 discriminant, then the case payload if it has one

Properties the schema does not name are kept as opaque PropertyRecords on the
decoded RecordValue and written back at the index they were read from.
Known properties are written back in the order they were read; fields the
list did not carry follow in schema order.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

from ..errors import (
    DuplicateProperty,
    PropertySizeMismatch,
    PropertyTypeMismatch,
    SaveCodecError,
)
from ..fields.base import Codec
from ..fields.sequence import Map, Sequence, decode_items, decode_pairs, read_count, write_count
from ..fields.structural import Record, RecordValue, Variant
from ..fields.text import NARROW_TEXT
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter, write_property_header
from .traversal import AggregateVisitor


NONE_NAME = "None"

# Text("None"): i32 count + 5 units
MIN_PROPERTY_LIST_SIZE = 4 + len(NONE_NAME) + 1


@dataclass
class PropertyRecord:
    """A property kept verbatim because the schema does not name it."""
    name: str
    type_tag: str
    payload: bytes

    @property
    def size(self) -> int:
        return len(self.payload)


def _encode_name(text: str) -> bytes:
    writer = SaveWriter()
    NARROW_TEXT.encode(text, writer)
    return writer.getvalue()


def _tagged_min_size(codec: Codec) -> int:
    if isinstance(codec, Record):
        return MIN_PROPERTY_LIST_SIZE
    return codec.min_size


def _emit_order(codec: Record, value) -> List[str]:
    """Known fields in the order they were read, then the rest in schema order."""
    order = [name for name in getattr(value, 'property_order', ()) if name in codec.field_map]
    seen = set(order)
    order.extend(name for name, _ in codec.fields if name not in seen)
    return order


class PropertyWriter(AggregateVisitor):
    """Encodes an aggregate into tagged form in a single traversal."""

    def __init__(self, writer: SaveWriter):
        self.writer = writer

    def visit_leaf(self, codec, value, path):
        codec.encode(value, self.writer)

    def visit_record(self, codec: Record, value, path):
        entries: List[bytes] = []
        for name in _emit_order(codec, value):
            if name not in value:
                continue
            field = codec.field_map[name]
            payload = SaveWriter()
            PropertyWriter(payload).visit_child(name, field, value[name], path)
            entries.append(self._property_bytes(name, field.type_tag, payload.getvalue()))

        for index, prop in sorted(getattr(value, 'unknown_properties', ()), key=lambda item: item[0]):
            entries.insert(index, self._property_bytes(prop.name, prop.type_tag, prop.payload))

        for entry in entries:
            self.writer.write(entry)
        NARROW_TEXT.encode(NONE_NAME, self.writer)

    def visit_sequence(self, codec: Sequence, value, path):
        write_count(self.writer, len(value))
        super().visit_sequence(codec, value, path)

    def visit_map(self, codec: Map, value, path):
        write_count(self.writer, len(value))
        for key, item in value.items():
            part = f"[{key!r}]"
            self.visit_child(part, codec.key, key, path)
            self.visit_child(part, codec.value, item, path)

    def visit_variant(self, codec: Variant, value, path):
        member, number = codec.discriminant(value, self.writer.position)
        self.writer.pack('I', number)
        if member in codec.payloads:
            self.visit_child(member.name, codec.payloads[member], value[1], path)

    @staticmethod
    def _property_bytes(name: str, type_tag: str, payload: bytes) -> bytes:
        out = SaveWriter()
        write_property_header(out, _encode_name(name), _encode_name(type_tag), len(payload))
        out.write(payload)
        return out.getvalue()


class PropertyReader:
    """Decodes tagged form back into the same values the positional codecs produce."""

    def read(self, codec: Codec, cursor: SaveCursor) -> Any:
        if isinstance(codec, Record):
            return self.read_record(codec, cursor)
        if isinstance(codec, Sequence):
            count = read_count(cursor, _tagged_min_size(codec.element))
            return decode_items(cursor, count, lambda c: self.read(codec.element, c))
        if isinstance(codec, Map):
            count = read_count(cursor, _tagged_min_size(codec.key) + _tagged_min_size(codec.value))
            return decode_pairs(cursor, count,
                                lambda c: self.read(codec.key, c),
                                lambda c: self.read(codec.value, c))
        if isinstance(codec, Variant):
            start = cursor.position
            member = codec.resolve(cursor.unpack('I')[0], start)
            payload = codec.payloads.get(member)
            if payload is None:
                return member
            try:
                return member, self.read(payload, cursor)
            except SaveCodecError as e:
                e.add_path(member.name)
                raise
        return codec.decode(cursor)

    def read_record(self, codec: Record, cursor: SaveCursor) -> RecordValue:
        value = RecordValue()
        index = 0
        while True:
            name = NARROW_TEXT.decode(cursor)
            if name == NONE_NAME:
                return value

            try:
                tag_start = cursor.position
                type_tag = NARROW_TEXT.decode(cursor)
                size_start = cursor.position
                size, = cursor.unpack('i')
                if size < 0:
                    raise PropertySizeMismatch(f"Negative payload size {size}", size_start)
                payload_start = cursor.position
                payload = cursor.read_fixed(size)

                field = codec.field_map.get(name)
                if field is None:
                    value.unknown_properties.append((index, PropertyRecord(name, type_tag, payload)))
                else:
                    if type_tag != field.type_tag:
                        raise PropertyTypeMismatch(
                            f"Property {name!r} is tagged {type_tag}, schema expects {field.type_tag}",
                            tag_start,
                        )
                    if name in value:
                        raise DuplicateProperty(f"Property {name!r} appears twice", payload_start)
                    sub = SaveCursor(payload, base_offset=payload_start)
                    value[name] = self.read(field, sub)
                    value.property_order.append(name)
                    if not sub.at_end:
                        raise PropertySizeMismatch(
                            f"Property {name!r} declares {size} bytes, {sub.remaining} left unread",
                            sub.position,
                        )
            except SaveCodecError as e:
                e.add_path(name)
                raise
            index += 1


class TaggedPropertyCodec(Codec):
    """
    Body codec for tagged generations, wrapping the same schema tree the
    positional backend uses.

    Usage:
        body = TaggedPropertyCodec(ME3_BODY)
        value = body.decode(cursor)
    """

    def __init__(self, schema: Codec):
        self.schema = schema
        self.type_tag = schema.type_tag
        self.min_size = _tagged_min_size(schema)

    def decode(self, cursor: SaveCursor) -> Any:
        return PropertyReader().read(self.schema, cursor)

    def encode(self, value: Any, writer: SaveWriter):
        PropertyWriter(writer).visit(self.schema, value)

    def accept(self, visitor, value, path: list):
        return self.schema.accept(visitor, value, path)

    def __repr__(self) -> str:
        return f"TaggedPropertyCodec({self.schema!r})"


def read_property_list(data: bytes) -> List[Tuple[str, str, int]]:
    """
    List (name, type_tag, size) of a top-level property list without a schema.

    Useful for inspecting unknown tagged bodies.
    """
    cursor = SaveCursor(data)
    entries = []
    while True:
        name = NARROW_TEXT.decode(cursor)
        if name == NONE_NAME:
            return entries
        type_tag = NARROW_TEXT.decode(cursor)
        size_start = cursor.position
        size, = cursor.unpack('i')
        if size < 0:
            raise PropertySizeMismatch(f"Property {name!r} has negative payload size {size}", size_start)
        cursor.read_fixed(size)
        entries.append((name, type_tag, size))
