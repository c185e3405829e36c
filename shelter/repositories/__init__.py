"""
Persistence adapters.

Routers and services ask ``get_store(kind)`` for a RecordStore instead of
touching the JSON files directly. The JSON backend is the default; setting
DATABASE_URL switches every store to the SQL backend.
"""

from __future__ import annotations

from shelter.core.config import Settings, get_settings

from .base import RecordStore
from .json_storage import JsonRecordStore


def get_store(kind: str, settings: Settings | None = None) -> RecordStore:
    cfg = settings or get_settings()
    if cfg.database_url:
        from .sql_repository import SQLRecordStore

        return SQLRecordStore(kind, cfg.database_url)
    return JsonRecordStore(cfg.data_dir / f"{kind}.json")


__all__ = ["JsonRecordStore", "RecordStore", "get_store"]
