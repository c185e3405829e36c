"""Storage interface shared by every record backend."""
from __future__ import annotations

import time
from typing import Any, Iterable, Mapping, Optional, Protocol


class RecordStore(Protocol):
    """CRUD-lite collection of records for one kind (pets, adopters)."""

    def list(self) -> list[dict]:
        ...

    def add(self, fields: Mapping[str, Any]) -> dict:
        ...

    def get_by_id(self, record_id: Any) -> Optional[dict]:
        ...

    def delete_by_id(self, record_id: Any) -> bool:
        ...


def now_ms() -> int:
    return int(time.time() * 1000)


def same_id(stored: Any, requested: Any) -> bool:
    """Ids match on their string form, so 123 and "123" are the same record."""
    return str(stored) == str(requested)


def next_id(existing: Iterable[Any], clock_ms: Optional[int] = None) -> int:
    """
    Creation instant in ms; bumped past the newest stored id when the clock
    has not moved on, so sequential adds never collide.
    """
    candidate = clock_ms if clock_ms is not None else now_ms()
    newest = None
    for value in existing:
        try:
            number = int(value)
        except (TypeError, ValueError):
            continue
        if newest is None or number > newest:
            newest = number
    if newest is not None and candidate <= newest:
        candidate = newest + 1
    return candidate


def build_record(record_id: int, fields: Mapping[str, Any]) -> dict:
    record = {"id": record_id}
    record.update({k: v for k, v in fields.items() if k != "id"})
    return record
