"""
JSON-file persistence adapter.

Each store owns one file holding a top-level array of records. Every call
re-reads the file and every mutation rewrites it whole; there is no cache and
no locking, so two concurrent writers race and the last one wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from shelter.core.errors import StorageUnavailable

from .base import build_record, next_id, same_id

logger = logging.getLogger(__name__)


class JsonRecordStore:
    """RecordStore backed by a single JSON document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonRecordStore({str(self.path)!r})"

    # -------------------------- file access --------------------------
    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailable(f"cannot create {self.path}: {exc}", location=str(self.path)) from exc
        logger.info("Created empty record file %s", self.path)

    def _load(self) -> list[dict]:
        self._ensure_file()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise StorageUnavailable(f"corrupt JSON in {self.path}: {exc}", location=str(self.path)) from exc
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {self.path}: {exc}", location=str(self.path)) from exc
        if not isinstance(data, list):
            raise StorageUnavailable(f"{self.path} does not hold a JSON array", location=str(self.path))
        if not all(isinstance(item, dict) for item in data):
            raise StorageUnavailable(f"{self.path} holds non-object records", location=str(self.path))
        return data

    def _save(self, records: list[dict]) -> None:
        try:
            self.path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        except (OSError, TypeError) as exc:
            raise StorageUnavailable(f"cannot write {self.path}: {exc}", location=str(self.path)) from exc

    # -------------------------- operations --------------------------
    def list(self) -> list[dict]:
        return self._load()

    def add(self, fields: Mapping[str, Any]) -> dict:
        records = self._load()
        record = build_record(next_id(r.get("id") for r in records), fields)
        records.append(record)
        self._save(records)
        logger.debug("Added record %s to %s", record["id"], self.path.name)
        return record

    def get_by_id(self, record_id: Any) -> Optional[dict]:
        for record in self._load():
            if same_id(record.get("id"), record_id):
                return record
        return None

    def delete_by_id(self, record_id: Any) -> bool:
        records = self._load()
        kept = [r for r in records if not same_id(r.get("id"), record_id)]
        self._save(kept)
        removed = len(kept) != len(records)
        if removed:
            logger.info("Deleted record %s from %s", record_id, self.path.name)
        return removed
