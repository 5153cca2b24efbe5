"""
Format Generations

A format generation ties a version marker to the schema and codec backend
used for the body, and says whether the file ends in a checksum footer.

Generations can be registered in code or loaded from an INI file:

    [me3]
    version = 59
    schema = mypackage.schemas:ME3_SAVE
    backend = positional
    checksum = true

`schema` is a module:attribute reference to a Codec (usually a Record).
"""

import configparser
import importlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .errors import FormatConfigError
from .fields.base import Codec
from .tagged.properties import TaggedPropertyCodec
from .utils import logWarning


class Backend(Enum):
    """Body encoding strategy."""
    POSITIONAL = "positional"  # fields back to back, order fixed by schema
    TAGGED = "tagged"  # self-describing property lists


@dataclass
class FormatGeneration:
    """One on-disk generation of the save format."""
    name: str
    version: int
    schema: Codec
    backend: Backend = Backend.POSITIONAL
    checksum: bool = True  # file ends in a CRC-32/BZIP2 footer
    body: Codec = field(init=False, repr=False)

    def __post_init__(self):
        if not self.name:
            raise FormatConfigError("Format generation has no name")
        if not -0x80000000 <= self.version <= 0x7FFFFFFF:
            raise FormatConfigError(f"Version {self.version} of {self.name} does not fit an i32")
        if not isinstance(self.backend, Backend):
            try:
                self.backend = Backend(str(self.backend).lower())
            except ValueError:
                raise FormatConfigError(f"Unknown backend {self.backend!r} for {self.name}") from None

        if self.backend is Backend.TAGGED:
            self.body = TaggedPropertyCodec(self.schema)
        else:
            self.body = self.schema


class FormatRegistry:
    """
    Registered generations, looked up by name or by version marker.

    Version markers must be unique so a file's generation can be detected
    from its first four bytes.
    """

    def __init__(self, generations: Optional[List[FormatGeneration]] = None):
        self._by_name: Dict[str, FormatGeneration] = {}
        self._by_version: Dict[int, FormatGeneration] = {}
        for generation in generations or []:
            self.register(generation)

    def register(self, generation: FormatGeneration) -> FormatGeneration:
        if generation.name in self._by_name:
            raise FormatConfigError(f"Format generation {generation.name!r} registered twice")
        other = self._by_version.get(generation.version)
        if other is not None:
            raise FormatConfigError(
                f"Generations {other.name!r} and {generation.name!r} share version {generation.version}"
            )
        self._by_name[generation.name] = generation
        self._by_version[generation.version] = generation
        return generation

    def get(self, name: str) -> FormatGeneration:
        generation = self._by_name.get(name)
        if generation is None:
            known = ", ".join(sorted(self._by_name)) or "none"
            raise FormatConfigError(f"Unknown format generation {name!r} (known: {known})")
        return generation

    def by_version(self, version: int) -> Optional[FormatGeneration]:
        return self._by_version.get(version)

    @property
    def versions(self) -> List[int]:
        return sorted(self._by_version)

    def __iter__(self) -> Iterator[FormatGeneration]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    @classmethod
    def from_ini(cls, config_path: Union[str, Path]) -> 'FormatRegistry':
        """
        Load generations from an INI file.

        Invalid sections are skipped with a warning.

        Raises:
            FormatConfigError: If the file is missing or yields no generation
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FormatConfigError(f"Format config not found: {config_path}")

        config = configparser.ConfigParser()
        config.read(config_path, encoding='utf-8')

        registry = cls()
        for section in config.sections():
            try:
                registry.register(_parse_generation_section(section, config[section]))
            except (FormatConfigError, ValueError) as e:
                logWarning(f"Skipping format [{section}]: {e}")

        if not len(registry):
            raise FormatConfigError(f"No usable format generation in {config_path}")
        return registry


def _parse_generation_section(section: str, data: configparser.SectionProxy) -> FormatGeneration:
    """Parse a single generation section"""
    version_str = data.get('version')
    if not version_str:
        raise FormatConfigError("Missing 'version' field")

    schema_ref = data.get('schema')
    if not schema_ref:
        raise FormatConfigError("Missing 'schema' field")

    return FormatGeneration(
        name=data.get('name', section),
        version=int(version_str, 0),
        schema=resolve_schema(schema_ref.strip()),
        backend=data.get('backend', 'positional').strip(),
        checksum=data.getboolean('checksum', fallback=True),
    )


def resolve_schema(reference: str) -> Codec:
    """Resolve 'package.module:ATTRIBUTE' to a schema codec."""
    module_name, _, attr = reference.partition(':')
    if not module_name or not attr:
        raise FormatConfigError(f"Schema reference {reference!r} is not 'module:attribute'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise FormatConfigError(f"Cannot import schema module {module_name!r}: {e}") from e

    schema = getattr(module, attr, None)
    if not isinstance(schema, Codec):
        raise FormatConfigError(f"{reference!r} is not a schema codec")
    return schema
