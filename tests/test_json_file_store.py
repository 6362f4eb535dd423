"""Tests for the JSON file key-value store."""

import json
from pathlib import Path

from nextwave.adapters.storage import JsonFileKeyValueStore


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    """Given no file, when reading a key, then None is returned."""
    assert JsonFileKeyValueStore(tmp_path / "kv.json").get("favorite_stations") is None


def test_put_then_get_survives_new_instance(tmp_path: Path) -> None:
    """Given a stored value, when reopening the store, then the value is read back."""
    path = tmp_path / "nested" / "kv.json"
    JsonFileKeyValueStore(path).put("favorite_stations", "[]")

    assert JsonFileKeyValueStore(path).get("favorite_stations") == "[]"
    assert json.loads(path.read_text(encoding="utf-8")) == {"favorite_stations": "[]"}


def test_put_keeps_other_keys(tmp_path: Path) -> None:
    """Given two keys, when overwriting one, then the other is kept."""
    store = JsonFileKeyValueStore(tmp_path / "kv.json")
    store.put("a", "1")
    store.put("b", "2")
    store.put("a", "3")

    assert store.get("a") == "3"
    assert store.get("b") == "2"


def test_no_temporary_files_left_behind(tmp_path: Path) -> None:
    """Given several writes, when done, then only the target file remains."""
    store = JsonFileKeyValueStore(tmp_path / "kv.json")
    for i in range(3):
        store.put("k", str(i))

    assert [p.name for p in tmp_path.iterdir()] == ["kv.json"]


def test_corrupt_file_reads_as_empty(tmp_path: Path) -> None:
    """Given a corrupt file, when reading, then it is treated as empty and can be overwritten."""
    path = tmp_path / "kv.json"
    path.write_text("{oops", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get("k") is None
    store.put("k", "v")
    assert store.get("k") == "v"
