"""
Behaviour of the JSON-file record store against a temporary directory.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from shelter.core.errors import StorageUnavailable
from shelter.repositories import JsonRecordStore, get_store
from shelter.repositories import base as store_base


@pytest.fixture()
def store(tmp_path):
    return JsonRecordStore(tmp_path / "data" / "pets.json")


def test_list_bootstraps_missing_file(store):
    assert not store.path.exists()
    assert store.list() == []
    assert store.path.exists()
    assert json.loads(store.path.read_text(encoding="utf-8")) == []


def test_add_then_get_round_trip(store):
    fields = {"name": "Mochi", "type": "cat", "health": ["vaccinated"]}
    created = store.add(fields)
    assert isinstance(created["id"], int)
    assert created == {"id": created["id"], **fields}
    assert store.get_by_id(created["id"]) == created


def test_add_keeps_insertion_order(store):
    for name in ("Mochi", "Rex", "Luna"):
        store.add({"name": name, "type": "cat"})
    assert [r["name"] for r in store.list()] == ["Mochi", "Rex", "Luna"]


def test_sequential_adds_get_distinct_ids(store, monkeypatch):
    monkeypatch.setattr(store_base, "now_ms", lambda: 1_700_000_000_000)
    ids = [store.add({"name": f"pet{i}", "type": "dog"})["id"] for i in range(5)]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)


def test_id_is_creation_time_in_ms(store, monkeypatch):
    monkeypatch.setattr(store_base, "now_ms", lambda: 1_710_000_000_123)
    assert store.add({"name": "Mochi", "type": "cat"})["id"] == 1_710_000_000_123


def test_caller_cannot_choose_id(store):
    created = store.add({"id": 42, "name": "Mochi", "type": "cat"})
    assert created["id"] != 42
    assert store.get_by_id(42) is None


def test_get_by_id_matches_on_string_form(store):
    created = store.add({"name": "Mochi", "type": "cat"})
    assert store.get_by_id(str(created["id"])) == created
    assert store.get_by_id(f" {created['id']}") is None
    assert store.get_by_id("missing") is None


def test_delete_existing_record(store):
    keep = store.add({"name": "Rex", "type": "dog"})
    gone = store.add({"name": "Mochi", "type": "cat"})
    assert store.delete_by_id(str(gone["id"])) is True
    assert store.get_by_id(gone["id"]) is None
    assert store.list() == [keep]


def test_delete_unknown_id_leaves_store_unchanged(store):
    store.add({"name": "Rex", "type": "dog"})
    before = store.list()
    assert store.delete_by_id(123) is False
    assert store.list() == before


def test_corrupt_file_raises_instead_of_resetting(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        store.list()
    assert store.path.read_text(encoding="utf-8") == "{not json"


def test_non_array_document_is_a_storage_fault(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text('{"pets": []}', encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        store.add({"name": "Mochi", "type": "cat"})


def test_get_store_uses_data_dir(data_dir):
    pets = get_store("pets")
    assert isinstance(pets, JsonRecordStore)
    assert pets.path == data_dir / "pets.json"


def test_array_of_non_objects_is_a_storage_fault(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        store.list()
    with pytest.raises(StorageUnavailable):
        store.get_by_id(1)


def test_failed_writes_raise_and_keep_previous_contents(store, monkeypatch):
    kept = store.add({"name": "Rex", "type": "dog"})
    before = store.path.read_text(encoding="utf-8")

    def refuse(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "write_text", refuse)

    with pytest.raises(StorageUnavailable):
        store.add({"name": "Mochi", "type": "cat"})
    with pytest.raises(StorageUnavailable):
        store.delete_by_id(kept["id"])
    assert store.path.read_text(encoding="utf-8") == before
    assert store.list() == [kept]


def test_bootstrap_failure_is_a_storage_fault(tmp_path, monkeypatch):
    fresh = JsonRecordStore(tmp_path / "elsewhere" / "adopters.json")

    def refuse(self, *args, **kwargs):
        raise OSError(28, "No space left on device", str(self))

    monkeypatch.setattr(Path, "write_text", refuse)
    with pytest.raises(StorageUnavailable):
        fresh.list()
