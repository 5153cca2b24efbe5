"""
Tagged Property Backend

Self-describing body encoding for tagged format generations:

- traversal: AggregateVisitor and iter_fields (value walk alongside a schema)
- properties: TaggedPropertyCodec, PropertyRecord, property list reader/writer
"""

from .traversal import AggregateVisitor, FieldCollector, iter_fields
from .properties import (
    TaggedPropertyCodec,
    PropertyRecord,
    PropertyReader,
    PropertyWriter,
    read_property_list,
    NONE_NAME,
)

__all__ = [
    'AggregateVisitor',
    'FieldCollector',
    'iter_fields',
    'TaggedPropertyCodec',
    'PropertyRecord',
    'PropertyReader',
    'PropertyWriter',
    'read_property_list',
    'NONE_NAME',
]
