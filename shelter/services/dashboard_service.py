"""Trailing seven-day histogram of pet intake for the dashboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

DAYS = 7


@dataclass
class DayBucket:
    day: datetime
    start_ms: int
    end_ms: int
    count: int = 0

    @property
    def label(self) -> str:
        return self.day.strftime("%a")

    def contains(self, stamp_ms: int) -> bool:
        return self.start_ms <= stamp_ms <= self.end_ms


@dataclass
class WeeklyStats:
    labels: list[str] = field(default_factory=list)
    counts: list[int] = field(default_factory=list)
    total: int = 0


def _to_ms(moment: datetime) -> int:
    return int(round(moment.timestamp() * 1000))


def _local_naive(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def day_buckets(now: Optional[datetime] = None, days: int = DAYS) -> list[DayBucket]:
    """Local-midnight buckets, oldest first, today last."""
    local = _local_naive(now)
    buckets = []
    for offset in range(days - 1, -1, -1):
        day = (local - timedelta(days=offset)).replace(hour=0, minute=0, second=0, microsecond=0)
        start = _to_ms(day)
        end = _to_ms(day + timedelta(days=1)) - 1
        buckets.append(DayBucket(day=day, start_ms=start, end_ms=end))
    return buckets


def _stamp(record: Any) -> Optional[int]:
    try:
        return int(record.get("id"))
    except (AttributeError, TypeError, ValueError):
        return None


def weekly_adoptions(records: Iterable[dict], now: Optional[datetime] = None) -> WeeklyStats:
    """
    Count records per local day over the last week, using the creation
    timestamp carried in each record id. Must be computed per request since
    "today" moves with the local calendar.
    """
    records = list(records)
    buckets = day_buckets(now)
    for record in records:
        stamp = _stamp(record)
        if stamp is None:
            continue
        for bucket in buckets:
            if bucket.contains(stamp):
                bucket.count += 1
                break
    return WeeklyStats(
        labels=[b.label for b in buckets],
        counts=[b.count for b in buckets],
        total=len(records),
    )
