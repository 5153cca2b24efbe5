"""Command line entry point."""

import json

import pytest

from helpers import i32, u32
from savecodec import FormatGeneration, SaveGame, decode, encode
from savecodec.cli import main
from savecodec.schemas.mass_effect_3 import GALAXY_MAP
from savecodec.utils import crc32_bzip2
from test_schemas import galaxy_map_bytes


FORMATS_INI = """
[galaxy]
version = 59
schema = savecodec.schemas.mass_effect_3:GALAXY_MAP

[galaxy-tagged]
version = 60
schema = savecodec.schemas.mass_effect_3:GALAXY_MAP
backend = tagged
checksum = false
"""


@pytest.fixture
def workspace(tmp_path):
    formats = tmp_path / "formats.ini"
    formats.write_text(FORMATS_INI, encoding='utf-8')

    body = i32(59) + galaxy_map_bytes()
    save = tmp_path / "galaxy.sav"
    save.write_bytes(body + u32(crc32_bzip2(body)))
    return tmp_path, str(formats), str(save)


def test_verify_reports_success(workspace, capsys) -> None:
    _, formats, save = workspace

    assert main(["--formats", formats, "verify", save]) == 0
    assert "round trip OK" in capsys.readouterr().out


def test_info_shows_generation_and_checksum(workspace, capsys) -> None:
    _, formats, save = workspace

    assert main(["--formats", formats, "info", save]) == 0

    out = capsys.readouterr().out
    assert "Generation: galaxy" in out
    assert "Version: 59" in out
    assert "(matches)" in out


def test_info_lists_tagged_properties(workspace, capsys) -> None:
    tmp_path, formats, save = workspace
    value = decode((tmp_path / "galaxy.sav").read_bytes(), generation=FormatGeneration("galaxy", 59, GALAXY_MAP)).body
    tagged = FormatGeneration("galaxy-tagged", 60, GALAXY_MAP, backend="tagged", checksum=False)
    tagged_save = tmp_path / "tagged.sav"
    tagged_save.write_bytes(encode(SaveGame(tagged, 60, value)))

    assert main(["--formats", formats, "info", str(tagged_save)]) == 0

    out = capsys.readouterr().out
    assert "Body: tagged" in out
    assert "Properties: 2" in out
    assert "planets: ArrayProperty" in out


def test_dump_writes_json(workspace) -> None:
    tmp_path, formats, save = workspace
    output = tmp_path / "save.json"

    assert main(["--formats", formats, "dump", save, "-o", str(output)]) == 0

    document = json.loads(output.read_text(encoding='utf-8'))
    assert document["generation"] == "galaxy"
    assert document["version"] == 59
    assert document["fields"]["planets[0].id"] == 12
    assert document["fields"]["planets[0].probes[0].y"] == 0.75
    assert document["fields"]["systems[0].reaper_detected"] is True


def test_truncated_save_fails(workspace, capsys) -> None:
    tmp_path, formats, save = workspace
    truncated = tmp_path / "truncated.sav"
    truncated.write_bytes((tmp_path / "galaxy.sav").read_bytes()[:20])

    assert main(["--formats", formats, "verify", str(truncated)]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_missing_file_fails(workspace) -> None:
    _, formats, _ = workspace

    assert main(["--formats", formats, "info", "does-not-exist.sav"]) == 1
