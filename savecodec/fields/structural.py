"""
Records and variants.

A Record is an ordered list of (name, codec) pairs. Field order is data, and
it equals the on-disk order exactly: fields are decoded and encoded one after
another with nothing in between.

A Variant maps a u32 discriminant to an enum member through a table built
once, when the schema is defined. Unmapped discriminants are decode errors.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from ..errors import MissingField, SaveCodecError, UnknownDiscriminant, ValueOutOfRange
from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter
from .base import Codec


class RecordValue(dict):
    """
    Decoded record: field name -> value, in field order.

    unknown_properties holds (stream_index, PropertyRecord) pairs for tagged
    properties the schema does not name. property_order lists the known
    fields in the order a tagged list stored them. Both are always empty for
    records decoded positionally.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.unknown_properties: List[Tuple[int, Any]] = []
        self.property_order: List[str] = []


class Record(Codec):
    """
    Ordered aggregate of named fields.

    Usage:
        VECTOR = Record("Vector", [("x", F32), ("y", F32), ("z", F32)])
        point = VECTOR.decode(cursor)   # RecordValue({'x': .., 'y': .., 'z': ..})
    """

    type_tag = "StructProperty"

    def __init__(self, name: str, fields: Sequence[Tuple[str, Codec]]):
        self.name = name
        self.fields: List[Tuple[str, Codec]] = list(fields)
        self.field_map: Dict[str, Codec] = {}
        for field_name, codec in self.fields:
            if field_name in self.field_map:
                raise ValueError(f"Record {name} declares field {field_name!r} twice")
            self.field_map[field_name] = codec
        self.min_size = sum(codec.min_size for _, codec in self.fields)

    def decode(self, cursor: SaveCursor) -> RecordValue:
        value = RecordValue()
        for field_name, codec in self.fields:
            try:
                value[field_name] = codec.decode(cursor)
            except SaveCodecError as e:
                e.add_path(field_name)
                raise
        return value

    def encode(self, value: Dict[str, Any], writer: SaveWriter):
        for field_name, codec in self.fields:
            if field_name not in value:
                raise MissingField(f"{self.name} value has no field {field_name!r}", writer.position)
            try:
                codec.encode(value[field_name], writer)
            except SaveCodecError as e:
                e.add_path(field_name)
                raise

    def accept(self, visitor, value, path: list):
        return visitor.visit_record(self, value, path)

    def __repr__(self) -> str:
        return f"Record({self.name!r}, {len(self.fields)} fields)"


class Variant(Codec):
    """
    Enumeration stored as a u32 discriminant.

    Args:
        enum_cls: Enum whose member values are the on-disk discriminants
        payloads: Optional member -> codec for cases that carry data. Such
                  cases decode to (member, payload_value).
    """

    min_size = 4
    type_tag = "EnumProperty"

    def __init__(self, enum_cls: Type[Enum], payloads: Optional[Dict[Enum, Codec]] = None):
        self.enum_cls = enum_cls
        self.payloads: Dict[Enum, Codec] = dict(payloads or {})

        self._by_value: Dict[int, Enum] = {}
        self._to_value: Dict[Enum, int] = {}
        for name, member in enum_cls.__members__.items():
            value = member.value
            if not isinstance(value, int) or not 0 <= value <= 0xFFFFFFFF:
                raise ValueError(f"{enum_cls.__name__}.{name} = {value!r} is not a u32 discriminant")
            if value in self._by_value:
                raise ValueError(f"{enum_cls.__name__}.{name} reuses discriminant {value}")
            self._by_value[value] = member
            self._to_value[member] = value

        for member in self.payloads:
            if member not in self._to_value:
                raise ValueError(f"Payload declared for {member!r}, not a member of {enum_cls.__name__}")

    def resolve(self, discriminant: int, offset: Optional[int] = None) -> Enum:
        member = self._by_value.get(discriminant)
        if member is None:
            raise UnknownDiscriminant(discriminant, self.enum_cls.__name__, offset)
        return member

    def discriminant(self, value: Any, offset: Optional[int] = None) -> Tuple[Enum, int]:
        """Return (member, discriminant) for a decoded variant value."""
        member = value[0] if isinstance(value, tuple) else value
        number = self._to_value.get(member)
        if number is None:
            raise ValueOutOfRange(f"{member!r} is not a case of {self.enum_cls.__name__}", offset)
        return member, number

    def decode(self, cursor: SaveCursor):
        start = cursor.position
        member = self.resolve(cursor.unpack('I')[0], start)
        payload = self.payloads.get(member)
        if payload is None:
            return member
        try:
            return member, payload.decode(cursor)
        except SaveCodecError as e:
            e.add_path(member.name)
            raise

    def encode(self, value, writer: SaveWriter):
        member, number = self.discriminant(value, writer.position)
        writer.pack('I', number)
        payload = self.payloads.get(member)
        if payload is None:
            return
        if not isinstance(value, tuple):
            raise MissingField(f"{member!r} carries a payload but none was given", writer.position)
        try:
            payload.encode(value[1], writer)
        except SaveCodecError as e:
            e.add_path(member.name)
            raise

    def accept(self, visitor, value, path: list):
        return visitor.visit_variant(self, value, path)

    def __repr__(self) -> str:
        return f"Variant({self.enum_cls.__name__})"
