import pytest

from storage.documents import load_document, save_document
from storage.json_files import USERS_FILE, JsonDataStore
from storage.kv import FileKeyValueStore, MemoryKeyValueStore
from errors import StorageError


class BrokenStore:
    def read(self, key):
        raise OSError("disk gone")

    def write(self, key, value):
        raise OSError("disk full")

    def delete(self, key):
        raise OSError("disk gone")


def test_memory_store_round_trip():
    store = MemoryKeyValueStore()
    store.write("a", b"1")
    assert store.read("a") == b"1"
    assert store.keys() == ["a"]
    store.delete("a")
    store.delete("a")
    assert store.read("a") is None


def test_file_store_writes_one_file_per_key(tmp_path):
    store = FileKeyValueStore(tmp_path / "kv")
    store.write("prepai_history", b"[]")
    assert (tmp_path / "kv" / "prepai_history.json").read_bytes() == b"[]"
    assert store.read("prepai_history") == b"[]"
    assert store.read("missing") is None
    store.delete("prepai_history")
    store.delete("prepai_history")
    with pytest.raises(ValueError):
        store.read("../escape")


def test_document_helpers_never_raise():
    broken = BrokenStore()
    assert load_document(broken, "k", default="fallback") == "fallback"
    assert save_document(broken, "k", [1]) is False

    store = MemoryKeyValueStore({"bad": b"{nope"})
    assert load_document(store, "bad", default=[]) == []


def test_json_data_store(tmp_path):
    data = JsonDataStore(tmp_path)
    assert data.read(USERS_FILE) == []
    with pytest.raises(StorageError):
        data.load(USERS_FILE)

    assert data.write(USERS_FILE, [{"name": "A", "email": "a@x.dev"}])
    assert data.load(USERS_FILE) == [{"name": "A", "email": "a@x.dev"}]

    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert data.read("broken.json") == []
    with pytest.raises(StorageError):
        data.load("broken.json")
