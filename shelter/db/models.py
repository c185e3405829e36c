"""SQLAlchemy model mirroring the JSON record files."""
from __future__ import annotations

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, JSON, UniqueConstraint, func

from .session import Base


class RecordRow(Base):
    __tablename__ = "records"
    __table_args__ = (UniqueConstraint("kind", "record_id", name="uq_records_kind_id"),)

    # insertion order; the only ordering the stores expose
    seq = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(32), nullable=False, index=True)
    record_id = Column(BigInteger, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_record(self) -> dict:
        record = {"id": int(self.record_id)}
        record.update({k: v for k, v in (self.data or {}).items() if k != "id"})
        return record
