"""Tests for the extension-based I/O registry."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sceneintel.io import get_extension, read_document, write_document
from sceneintel.utils.errors import UnsupportedFormatError


def test_unknown_extension_raises(tmp_path: Path) -> None:
    path = tmp_path / "file.unknown"
    with pytest.raises(UnsupportedFormatError):
        read_document(path)
    with pytest.raises(UnsupportedFormatError):
        write_document(path, {})


def test_yaml_writer_not_registered(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormatError):
        write_document(tmp_path / "out.yml", {})


def test_json_write_then_read(tmp_path: Path) -> None:
    data = {"scenes": [{"location_name": "CAFÉ"}]}
    path = tmp_path / "nested" / "sample.json"
    write_document(path, data)
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert "CAFÉ" in text
    assert read_document(path) == data


def test_json_with_bom(tmp_path: Path) -> None:
    path = tmp_path / "bom.json"
    path.write_bytes("\ufeff".encode("utf-8") + json.dumps([{"page": 1}]).encode("utf-8"))
    assert read_document(path) == [{"page": 1}]


def test_yaml_reader(tmp_path: Path) -> None:
    path = tmp_path / "breakdown.yaml"
    path.write_text("scenes:\n  - location_name: EXT. PARK - DAY\n    characters: [JOHN]\n")
    assert read_document(path) == {
        "scenes": [{"location_name": "EXT. PARK - DAY", "characters": ["JOHN"]}]
    }


def test_extension_case_insensitive(tmp_path: Path) -> None:
    path = tmp_path / "SAMPLE.JSON"
    write_document(path, [1, 2])
    assert get_extension(path) == ".json"
    assert read_document(path) == [1, 2]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_document(tmp_path / "missing.json")
