"""
savecodec

Byte-exact reader/writer for versioned game save files.

Packages:
- parsers: SaveCursor, the forward-only reader
- fields: field codecs (primitives, text, padding, collections, records, variants)
- tagged: self-describing property list backend and aggregate traversal
- schemas: per-title layouts
- utils: logging, output buffer, CRC-32/BZIP2

Usage:
    from savecodec import decode, encode, FormatGeneration, FormatRegistry

    registry = FormatRegistry.from_ini("formats.ini")
    save = decode(Path("ME3Save.pcsav").read_bytes(), registry=registry)
    for path, value in save.fields():
        print(path, value)
    Path("out.pcsav").write_bytes(encode(save))
"""

from .errors import (
    SaveCodecError,
    UnexpectedEof,
    UnsupportedVersion,
    UnknownDiscriminant,
    TruncatedSequence,
    SequenceTooLarge,
    TextEncodingError,
    ValueOutOfRange,
    PaddingSizeError,
    MissingField,
    DuplicateMapKey,
    PropertyTypeMismatch,
    PropertySizeMismatch,
    DuplicateProperty,
    ChecksumMismatch,
    TrailingData,
    FormatConfigError,
    RoundTripError,
)
from .formats import Backend, FormatGeneration, FormatRegistry, resolve_schema
from .save_file import SaveGame, decode, encode
from .roundtrip import Mismatch, find_mismatch, verify_round_trip

__version__ = "0.3.0"

__all__ = [
    # Entry points
    'decode',
    'encode',
    'SaveGame',
    'verify_round_trip',
    'find_mismatch',
    'Mismatch',
    # Generations
    'Backend',
    'FormatGeneration',
    'FormatRegistry',
    'resolve_schema',
    # Errors
    'SaveCodecError',
    'UnexpectedEof',
    'UnsupportedVersion',
    'UnknownDiscriminant',
    'TruncatedSequence',
    'SequenceTooLarge',
    'TextEncodingError',
    'ValueOutOfRange',
    'PaddingSizeError',
    'MissingField',
    'DuplicateMapKey',
    'PropertyTypeMismatch',
    'PropertySizeMismatch',
    'DuplicateProperty',
    'ChecksumMismatch',
    'TrailingData',
    'FormatConfigError',
    'RoundTripError',
]
