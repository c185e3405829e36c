"""One-off migration script: JSON record files -> SQL backend (DATABASE_URL)."""
from __future__ import annotations

import sys
from pathlib import Path

# Make the shelter package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shelter.core.config import get_settings
from shelter.db.create_tables import create_all
from shelter.domain import KINDS
from shelter.repositories.json_storage import JsonRecordStore
from shelter.repositories.sql_repository import SQLRecordStore


def migrate() -> dict:
    settings = get_settings()
    if not settings.database_url:
        raise SystemExit("DATABASE_URL must be set to migrate")
    create_all(settings.database_url)
    copied = {}
    for name in KINDS:
        source = JsonRecordStore(settings.data_dir / f"{name}.json")
        target = SQLRecordStore(name, settings.database_url)
        existing = {str(r["id"]) for r in target.list()}
        count = 0
        for record in source.list():
            if str(record.get("id")) in existing:
                continue
            target.import_record(record)
            count += 1
        copied[name] = count
    return copied


if __name__ == "__main__":
    result = migrate()
    for name, count in result.items():
        print(f"{name}: {count} record(s) copied")
    print("JSON data migrated successfully.")
