"""
Save Codec Errors

Every failure raised while decoding or encoding a save derives from
SaveCodecError. Errors carry the byte offset where the failure was detected
and the path of the field being processed, so a message reads like:

    Unexpected end of data: need 4 bytes, 2 remaining (at player.levels[3].name, offset 0x1A4)
"""

from typing import List, Optional, Sequence


def format_path(parts: Sequence[str]) -> str:
    """Join field names and [index] parts into 'a.b[2].c'."""
    out = ""
    for part in parts:
        if part.startswith('[') or not out:
            out += part
        else:
            out += '.' + part
    return out


class SaveCodecError(Exception):
    """Base class for all codec failures."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self._path: List[str] = []

    def add_path(self, part: str) -> 'SaveCodecError':
        """Prepend a path component (field name or [index]) while unwinding."""
        self._path.insert(0, part)
        return self

    @property
    def path(self) -> str:
        """Human-readable field path, e.g. 'player.levels[3].name'."""
        return format_path(self._path)

    def __str__(self) -> str:
        context = []
        if self._path:
            context.append(f"at {self.path}")
        if self.offset is not None:
            context.append(f"offset 0x{self.offset:X}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class UnexpectedEof(SaveCodecError):
    """Fewer bytes remain than the field needs."""

    def __init__(self, offset: int, needed: int, remaining: int):
        super().__init__(f"Unexpected end of data: need {needed} bytes, {remaining} remaining", offset)
        self.needed = needed
        self.remaining = remaining


class UnsupportedVersion(SaveCodecError):
    """The leading version marker does not match the target generation."""

    def __init__(self, found: int, expected: Sequence[int], offset: int = 0):
        self.found = found
        self.expected = tuple(expected)
        wanted = ", ".join(str(v) for v in self.expected) or "none registered"
        super().__init__(
            f"Wrong save version {found} (expected {wanted}), "
            f"please use a save from the last version of the game",
            offset,
        )


class UnknownDiscriminant(SaveCodecError):
    """A variant discriminant has no entry in the enumeration table."""

    def __init__(self, value: int, enum_name: str, offset: Optional[int] = None):
        super().__init__(f"Unknown discriminant {value} (0x{value:08X}) for {enum_name}", offset)
        self.value = value


class TruncatedSequence(SaveCodecError):
    """A declared element count needs more bytes than remain."""

    def __init__(self, count: int, min_bytes: int, remaining: int, offset: Optional[int] = None):
        super().__init__(
            f"Sequence declares {count} elements (at least {min_bytes} bytes) "
            f"but only {remaining} bytes remain",
            offset,
        )
        self.count = count


class SequenceTooLarge(SaveCodecError):
    """A sequence has more elements than the 4-byte count can represent."""

    def __init__(self, count: int):
        super().__init__(f"Sequence of {count} elements exceeds the 4-byte count limit")
        self.count = count


class TextEncodingError(SaveCodecError):
    """Text code units are malformed or cannot be represented."""


class ValueOutOfRange(SaveCodecError):
    """A primitive value does not fit its on-disk width."""


class PaddingSizeError(SaveCodecError):
    """An opaque block does not have the size fixed by the schema."""


class MissingField(SaveCodecError):
    """A record value lacks a field the schema requires."""


class DuplicateMapKey(SaveCodecError):
    """An ordered map repeats a key, which cannot be held losslessly."""


class PropertyTypeMismatch(SaveCodecError):
    """A tagged property carries a type tag different from its schema field."""


class PropertySizeMismatch(SaveCodecError):
    """A tagged property payload was not consumed exactly."""


class DuplicateProperty(SaveCodecError):
    """A tagged property list names the same schema field twice."""


class ChecksumMismatch(SaveCodecError):
    """The stored footer disagrees with the checksum of the preceding bytes."""

    def __init__(self, stored: int, computed: int, offset: Optional[int] = None):
        super().__init__(f"Checksum mismatch: stored 0x{stored:08X}, computed 0x{computed:08X}", offset)
        self.stored = stored
        self.computed = computed


class TrailingData(SaveCodecError):
    """Bytes remain after the last field of the file."""


class FormatConfigError(SaveCodecError):
    """A format generation is unknown or its configuration is invalid."""


class RoundTripError(SaveCodecError):
    """Re-encoding a decoded save did not reproduce the input."""

    def __init__(self, mismatch):
        super().__init__(
            f"Round trip differs at 0x{mismatch.offset:02X}: "
            f"{mismatch.expected.hex(' ')} != {mismatch.actual.hex(' ')}",
            mismatch.offset,
        )
        self.mismatch = mismatch
