"""
Field Codecs

Building blocks for save file schemas:

- primitives: fixed-width integers, floats and booleans (I32, F32, BOOL, ...)
- text: length-prefixed narrow/wide text (Text, UnrealText)
- padding: opaque fixed-size byte blocks (Padding)
- sequence: length-prefixed lists and ordered maps (Sequence, Map)
- structural: records and enumerations (Record, Variant)
- version: leading version marker (VersionGate)
- footer: trailing CRC-32/BZIP2 (ChecksumFooter)

Usage:
    from savecodec.fields import Record, Sequence, I32, F32, UNREAL_TEXT

    PLANET = Record("Planet", [
        ("id", I32),
        ("visited", BOOL32),
        ("probes", Sequence(VECTOR_2D)),
    ])
"""

from .base import Codec

from .primitives import (
    Primitive,
    Bool,
    I8, U8, I16, U16, I32, U32, I64, U64, F32, F64,
    BOOL,
    BOOL32,
)

from .text import (
    Text,
    UnrealText,
    WideText,
    NARROW_TEXT,
    WIDE_TEXT,
    UNREAL_TEXT,
)

from .padding import Padding

from .sequence import (
    Sequence,
    Map,
    read_count,
    write_count,
    decode_items,
    decode_pairs,
)

from .structural import (
    Record,
    RecordValue,
    Variant,
)

from .version import VersionGate
from .footer import ChecksumFooter

__all__ = [
    'Codec',
    # Primitives
    'Primitive', 'Bool',
    'I8', 'U8', 'I16', 'U16', 'I32', 'U32', 'I64', 'U64', 'F32', 'F64',
    'BOOL', 'BOOL32',
    # Text
    'Text', 'UnrealText', 'WideText', 'NARROW_TEXT', 'WIDE_TEXT', 'UNREAL_TEXT',
    # Padding
    'Padding',
    # Collections
    'Sequence', 'Map', 'read_count', 'write_count', 'decode_items', 'decode_pairs',
    # Structural
    'Record', 'RecordValue', 'Variant',
    # File framing
    'VersionGate', 'ChecksumFooter',
]
