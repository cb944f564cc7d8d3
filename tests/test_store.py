"""Tests for store module."""
import pytest

from bigidle.errors import StorageError
from bigidle.store import FileStore, MemoryStore


def test_memory_store_round_trip():
    store = MemoryStore()
    assert store.get("k") is None
    store.set("k", "v")
    assert store.get("k") == "v"
    store.delete("k")
    assert store.get("k") is None


def test_memory_store_initial_data_is_copied():
    initial = {"k": "v"}
    store = MemoryStore(initial)
    store.set("k", "w")
    assert initial["k"] == "v"


def test_memory_store_delete_missing():
    MemoryStore().delete("nothing")


def test_file_store_round_trip(tmp_path):
    store = FileStore(tmp_path / "saves")
    assert store.get("slot") is None
    store.set("slot", '{"a": 1}')
    assert store.get("slot") == '{"a": 1}'
    assert (tmp_path / "saves" / "slot.json").read_text() == '{"a": 1}'


def test_file_store_overwrite_leaves_no_temp_files(tmp_path):
    store = FileStore(tmp_path)
    store.set("slot", "first")
    store.set("slot", "second")
    assert store.get("slot") == "second"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["slot.json"]


def test_file_store_delete(tmp_path):
    store = FileStore(tmp_path)
    store.set("slot", "x")
    store.delete("slot")
    assert store.get("slot") is None
    store.delete("slot")


def test_file_store_write_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    store = FileStore(blocker)
    with pytest.raises(StorageError, match="Cannot write"):
        store.set("slot", "x")


def test_file_store_read_error(tmp_path):
    (tmp_path / "slot.json").mkdir()
    store = FileStore(tmp_path)
    with pytest.raises(StorageError, match="Cannot read"):
        store.get("slot")


def test_file_store_undecodable_bytes(tmp_path):
    (tmp_path / "slot.json").write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(StorageError):
        FileStore(tmp_path).get("slot")
