"""
Smoke tests for the SQL record store against a temporary SQLite database.
"""
from __future__ import annotations

import importlib.util
import json
import threading
from pathlib import Path

import pytest

from shelter.core import config as core_config
from shelter.db import models
from shelter.db import session as db_session
from shelter.repositories import get_store
from shelter.repositories import base as store_base
from shelter.repositories.sql_repository import SQLRecordStore

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch, data_dir):
    """Temporary SQLite database; caches are reset so DATABASE_URL is re-read."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.dispose_engines()

    models.Base.metadata.create_all(bind=db_session.get_engine())

    yield db_file

    db_session.dispose_engines()


def test_get_store_switches_to_sql(temp_db):
    assert isinstance(get_store("pets"), SQLRecordStore)


def test_sql_store_contract(temp_db, monkeypatch):
    monkeypatch.setattr(store_base, "now_ms", lambda: 1_700_000_000_000)
    pets = SQLRecordStore("pets")
    adopters = SQLRecordStore("adopters")
    assert pets.list() == []

    first = pets.add({"name": "Mochi", "type": "cat", "health": ["vaccinated"]})
    second = pets.add({"id": 7, "name": "Rex", "type": "dog"})
    adopters.add({"firstName": "Ana", "lastName": "Lima", "email": "ana@example.com"})

    assert first == {"id": 1_700_000_000_000, "name": "Mochi", "type": "cat", "health": ["vaccinated"]}
    assert second["id"] == first["id"] + 1
    assert [p["name"] for p in pets.list()] == ["Mochi", "Rex"]
    assert len(adopters.list()) == 1

    assert pets.get_by_id(str(first["id"])) == first
    assert pets.get_by_id(f"0{first['id']}") is None
    assert pets.get_by_id("abc") is None

    assert pets.delete_by_id(second["id"]) is True
    assert pets.delete_by_id(second["id"]) is False
    assert pets.list() == [first]
    assert len(adopters.list()) == 1


def test_migrate_json_into_sql(temp_db, data_dir):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "pets.json").write_text(
        json.dumps([{"id": 5, "name": "Old", "type": "cat"}, {"id": 9, "name": "Older", "type": "dog"}]),
        encoding="utf-8",
    )
    spec = importlib.util.spec_from_file_location("migrate_to_sql", ROOT / "scripts" / "migrate_to_sql.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    assert module.migrate() == {"pets": 2, "adopters": 0}
    assert [p["id"] for p in SQLRecordStore("pets").list()] == [5, 9]
    # running again copies nothing new
    assert module.migrate() == {"pets": 0, "adopters": 0}


def test_concurrent_adds_retry_past_id_collision(temp_db, monkeypatch):
    pets = SQLRecordStore("pets")
    barrier = threading.Barrier(2)
    waited = threading.local()

    def clock() -> int:
        # both threads read the same newest id before either inserts
        if not getattr(waited, "done", False):
            waited.done = True
            barrier.wait(timeout=5)
        return 1_700_000_000_000

    monkeypatch.setattr(store_base, "now_ms", clock)
    results, errors = [], []

    def worker(name: str) -> None:
        try:
            results.append(pets.add({"name": name, "type": "cat"}))
        except Exception as exc:  # surfaced by the assertions below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in ("Mochi", "Luna")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert sorted(r["id"] for r in results) == [1_700_000_000_000, 1_700_000_000_001]
    assert sorted(p["name"] for p in pets.list()) == ["Luna", "Mochi"]


def test_session_scope_rolls_back_failed_unit_of_work(temp_db):
    with pytest.raises(RuntimeError):
        with db_session.session_scope() as session:
            session.add(models.RecordRow(kind="pets", record_id=1, data={"name": "Ghost"}))
            session.flush()
            raise RuntimeError("boom")
    assert SQLRecordStore("pets").list() == []


def test_store_uses_explicit_database_url(tmp_path, data_dir):
    url = f"sqlite:///{tmp_path / 'explicit.db'}"
    try:
        models.Base.metadata.create_all(bind=db_session.get_engine(url))
        store = SQLRecordStore("adopters", url)
        created = store.add({"firstName": "Ana", "lastName": "Lima", "email": "ana@example.com"})
        assert store.get_by_id(created["id"]) == created
    finally:
        db_session.dispose_engines()
