import lzma

import pytest

from primetracker.index import ManifestIndexError, load_index, parse_index

RESOURCES = "ExportResources_en.json!00_" + "A" * 22
RECIPES = "ExportRecipes_en.json!00_" + "b" * 22


def _compress(text: str) -> bytes:
    return lzma.compress(text.encode("utf-8"), format=lzma.FORMAT_ALONE)


def test_parse_maps_names_to_hashed_names():
    index = parse_index(_compress(f"{RESOURCES}\n{RECIPES}\n"))
    assert index == {
        "ExportResources_en.json": RESOURCES,
        "ExportRecipes_en.json": RECIPES,
    }


def test_parse_handles_crlf_and_missing_final_newline():
    index = parse_index(_compress(f"{RESOURCES}\r\n{RECIPES}"))
    assert index["ExportResources_en.json"] == RESOURCES
    assert index["ExportRecipes_en.json"] == RECIPES


def test_every_value_ends_with_its_key_plus_suffix():
    index = parse_index(_compress(f"{RESOURCES}\n{RECIPES}\n"))
    for key, value in index.items():
        assert value.startswith(key)
        assert len(value) - len(key) == 26


def test_empty_index_is_empty():
    assert parse_index(_compress("")) == {}


def test_short_line_is_an_error():
    with pytest.raises(ManifestIndexError):
        parse_index(_compress("short\n"))


def test_corrupt_data_is_an_error():
    with pytest.raises(ManifestIndexError):
        parse_index(b"this is not lzma data at all")


def test_invalid_utf8_is_an_error():
    with pytest.raises(ManifestIndexError):
        parse_index(lzma.compress(b"\xff\xfe" * 20, format=lzma.FORMAT_ALONE))


def test_load_reads_file(tmp_path):
    path = tmp_path / "index_en.txt.lzma"
    path.write_bytes(_compress(f"{RECIPES}\n"))
    assert load_index(path) == {"ExportRecipes_en.json": RECIPES}


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_index(tmp_path / "absent.lzma")