"""Format generations and INI registry loading."""

import pytest

from savecodec import Backend, FormatConfigError, FormatGeneration, FormatRegistry, resolve_schema
from savecodec.fields import I32, Record
from savecodec.schemas.mass_effect_3 import GALAXY_MAP
from savecodec.tagged import TaggedPropertyCodec


PAIR = Record("Pair", [("a", I32), ("b", I32)])

FORMATS_INI = """
[me3]
version = 59
schema = savecodec.schemas.mass_effect_3:GALAXY_MAP
checksum = true

[me3-tagged]
version = 0x3C
schema = savecodec.schemas.mass_effect_3:GALAXY_MAP
backend = Tagged
checksum = no

[broken]
schema = savecodec.schemas.mass_effect_3:GALAXY_MAP
"""


def test_registry_loads_valid_sections(tmp_path) -> None:
    path = tmp_path / "formats.ini"
    path.write_text(FORMATS_INI, encoding='utf-8')

    registry = FormatRegistry.from_ini(path)

    assert len(registry) == 2
    assert registry.versions == [59, 60]

    me3 = registry.get("me3")
    assert me3.schema is GALAXY_MAP
    assert me3.body is GALAXY_MAP
    assert me3.backend is Backend.POSITIONAL
    assert me3.checksum

    tagged = registry.by_version(60)
    assert tagged.name == "me3-tagged"
    assert tagged.backend is Backend.TAGGED
    assert isinstance(tagged.body, TaggedPropertyCodec)
    assert not tagged.checksum


def test_invalid_section_is_skipped_with_warning(tmp_path, capsys) -> None:
    path = tmp_path / "formats.ini"
    path.write_text(FORMATS_INI, encoding='utf-8')

    FormatRegistry.from_ini(path)

    assert "Skipping format [broken]" in capsys.readouterr().out


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(FormatConfigError):
        FormatRegistry.from_ini(tmp_path / "absent.ini")


def test_config_without_usable_sections(tmp_path) -> None:
    path = tmp_path / "formats.ini"
    path.write_text("[only]\nversion = 59\n", encoding='utf-8')

    with pytest.raises(FormatConfigError):
        FormatRegistry.from_ini(path)


def test_registry_rejects_shared_version() -> None:
    registry = FormatRegistry([FormatGeneration("first", 59, PAIR)])

    with pytest.raises(FormatConfigError):
        registry.register(FormatGeneration("second", 59, PAIR))
    with pytest.raises(FormatConfigError):
        registry.register(FormatGeneration("first", 60, PAIR))


def test_unknown_generation_name() -> None:
    registry = FormatRegistry([FormatGeneration("first", 59, PAIR)])

    with pytest.raises(FormatConfigError) as excinfo:
        registry.get("second")

    assert "first" in str(excinfo.value)


@pytest.mark.parametrize("kwargs", [
    {"name": "", "version": 59},
    {"name": "big", "version": 2 ** 31},
    {"name": "odd", "version": 59, "backend": "columnar"},
])
def test_invalid_generation(kwargs) -> None:
    with pytest.raises(FormatConfigError):
        FormatGeneration(schema=PAIR, **kwargs)


@pytest.mark.parametrize("reference", [
    "savecodec.schemas.mass_effect_3",
    "savecodec.schemas.no_such_module:GALAXY_MAP",
    "savecodec.schemas.mass_effect_3:Difficulty",
    "savecodec.schemas.mass_effect_3:MISSING",
])
def test_bad_schema_reference(reference) -> None:
    with pytest.raises(FormatConfigError):
        resolve_schema(reference)


def test_schema_reference_resolves() -> None:
    assert resolve_schema("savecodec.schemas.mass_effect_3:GALAXY_MAP") is GALAXY_MAP
