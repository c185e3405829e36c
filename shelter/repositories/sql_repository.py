"""Record store backed by SQLAlchemy (used when DATABASE_URL is set)."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shelter.core.errors import StorageUnavailable
from shelter.db.models import RecordRow
from shelter.db.session import session_scope

from .base import next_id

logger = logging.getLogger(__name__)

# concurrent adds may pick the same id; the unique constraint rejects the
# loser, which re-reads the newest id and tries again
MAX_ADD_ATTEMPTS = 5


def _canonical_id(record_id: Any) -> Optional[int]:
    """Stored ids are ints, so only their exact decimal spelling can match."""
    text = str(record_id)
    try:
        number = int(text)
    except ValueError:
        return None
    return number if str(number) == text else None


class SQLRecordStore:
    """RecordStore over the ``records`` table, one ``kind`` per store."""

    def __init__(self, kind: str, database_url: Optional[str] = None):
        self.kind = kind
        self.database_url = database_url

    def __repr__(self) -> str:
        return f"SQLRecordStore({self.kind!r})"

    def _scope(self):
        return session_scope(self.database_url)

    def _fault(self, exc: Exception) -> StorageUnavailable:
        return StorageUnavailable(f"database error for {self.kind}: {exc}", location=self.kind)

    def list(self) -> list[dict]:
        stmt = select(RecordRow).where(RecordRow.kind == self.kind).order_by(RecordRow.seq)
        try:
            with self._scope() as session:
                return [row.to_record() for row in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise self._fault(exc) from exc

    def add(self, fields: Mapping[str, Any]) -> dict:
        data = {k: v for k, v in fields.items() if k != "id"}
        newest_stmt = select(func.max(RecordRow.record_id)).where(RecordRow.kind == self.kind)
        collision: Optional[IntegrityError] = None
        for attempt in range(1, MAX_ADD_ATTEMPTS + 1):
            try:
                with self._scope() as session:
                    newest = session.execute(newest_stmt).scalar_one_or_none()
                    row = RecordRow(
                        kind=self.kind,
                        record_id=next_id([newest] if newest is not None else []),
                        data=data,
                    )
                    session.add(row)
                    session.flush()
                    record = row.to_record()
            except IntegrityError as exc:
                collision = exc
                logger.info("Id collision adding to %s (attempt %d/%d)", self.kind, attempt, MAX_ADD_ATTEMPTS)
                continue
            except SQLAlchemyError as exc:
                raise self._fault(exc) from exc
            logger.debug("Added record %s to %s", record["id"], self.kind)
            return record
        raise self._fault(collision) from collision

    def import_record(self, record: Mapping[str, Any]) -> None:
        """Insert a record keeping its existing id (used by the JSON migration)."""
        record_id = _canonical_id(record.get("id"))
        if record_id is None:
            raise ValueError(f"record without integer id: {record!r}")
        data = {k: v for k, v in record.items() if k != "id"}
        try:
            with self._scope() as session:
                session.add(RecordRow(kind=self.kind, record_id=record_id, data=data))
        except SQLAlchemyError as exc:
            raise self._fault(exc) from exc

    def get_by_id(self, record_id: Any) -> Optional[dict]:
        wanted = _canonical_id(record_id)
        if wanted is None:
            return None
        stmt = select(RecordRow).where(RecordRow.kind == self.kind, RecordRow.record_id == wanted)
        try:
            with self._scope() as session:
                row = session.execute(stmt).scalars().first()
                return row.to_record() if row else None
        except SQLAlchemyError as exc:
            raise self._fault(exc) from exc

    def delete_by_id(self, record_id: Any) -> bool:
        wanted = _canonical_id(record_id)
        if wanted is None:
            return False
        stmt = delete(RecordRow).where(RecordRow.kind == self.kind, RecordRow.record_id == wanted)
        try:
            with self._scope() as session:
                removed = (session.execute(stmt).rowcount or 0) > 0
        except SQLAlchemyError as exc:
            raise self._fault(exc) from exc
        if removed:
            logger.info("Deleted record %s from %s", record_id, self.kind)
        return removed
