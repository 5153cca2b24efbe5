"""
Save file entry points.

File layout:
- i32 version marker (selects the format generation)
- body (positional record fields, or a tagged property list)
- u32 CRC-32/BZIP2 footer, for generations that carry one

Usage:
    registry = FormatRegistry([FormatGeneration("me3", ME3_SAVE_VERSION, ME3_SAVE)])
    save = decode(data, registry=registry)
    save.body["seconds_played"] += 60.0
    data = encode(save)
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

from .errors import FormatConfigError, TrailingData, UnsupportedVersion
from .fields.footer import ChecksumFooter
from .fields.version import VersionGate
from .formats import FormatGeneration, FormatRegistry
from .parsers.base import SaveCursor
from .tagged.traversal import iter_fields
from .utils import SaveWriter, logDebug


@dataclass
class SaveGame:
    """A decoded save: the generation it was read as, and its values."""
    generation: FormatGeneration
    version: int
    body: Any
    checksum: Optional[int] = None  # stored footer value, not verified unless asked

    def fields(self) -> Iterator[Tuple[str, Any]]:
        """Yield (path, value) for every leaf of the body."""
        return iter_fields(self.generation.schema, self.body)


def _select_generation(cursor: SaveCursor,
                       generation: Union[FormatGeneration, str, None],
                       registry: Optional[FormatRegistry]) -> Tuple[FormatGeneration, int]:
    if isinstance(generation, str):
        if registry is None:
            raise FormatConfigError(f"Generation {generation!r} named without a registry")
        generation = registry.get(generation)

    if generation is not None:
        return generation, VersionGate(generation.version).decode(cursor)

    if registry is None or not len(registry):
        raise FormatConfigError("No format generation given and no registry to detect one from")

    start = cursor.position
    found, = cursor.unpack('i')
    detected = registry.by_version(found)
    if detected is None:
        raise UnsupportedVersion(found, registry.versions, start)
    return detected, found


def decode(data: bytes,
           generation: Union[FormatGeneration, str, None] = None,
           registry: Optional[FormatRegistry] = None,
           verify_checksum: bool = False) -> SaveGame:
    """
    Decode a complete save file.

    Args:
        data: Raw file contents
        generation: Generation (or its registered name) to decode as. When
                    None, it is detected from the version marker.
        registry: Registered generations, for detection or name lookup
        verify_checksum: Compare the stored footer against a fresh CRC

    Returns:
        SaveGame

    Raises:
        SaveCodecError: On the first failure; nothing partial is returned
    """
    cursor = SaveCursor(data)
    selected, version = _select_generation(cursor, generation, registry)
    logDebug(f"Decoding {len(data):,} bytes as {selected.name} "
             f"(version {version}, {selected.backend.value} body)")

    body = selected.body.decode(cursor)
    logDebug(f"Body ends at 0x{cursor.position:X}")

    checksum = None
    if selected.checksum:
        checksum = ChecksumFooter(verify=verify_checksum).decode(cursor)

    if not cursor.at_end:
        raise TrailingData(f"{cursor.remaining} unexpected bytes after the end of the save", cursor.position)

    return SaveGame(generation=selected, version=version, body=body, checksum=checksum)


def encode(save: SaveGame) -> bytes:
    """
    Encode a save back to bytes.

    The version marker is the generation's constant and the footer (if any)
    is recomputed; save.version and save.checksum are not written as-is.
    """
    generation = save.generation
    writer = SaveWriter()
    VersionGate(generation.version).encode(save.version, writer)
    generation.body.encode(save.body, writer)
    if generation.checksum:
        ChecksumFooter().encode(save.checksum, writer)

    logDebug(f"Encoded {generation.name}: {len(writer):,} bytes")
    return writer.getvalue()
