"""UTC time helpers.

Datetimes in shiptrack are timezone-aware UTC; session records use integer
epoch milliseconds instead.
"""

import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize to aware UTC. Naive values (sqlite drops tzinfo) are taken as UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def now_ms() -> int:
    """Current Unix time in milliseconds (session createdAt/lastActivity format)."""
    return time.time_ns() // 1_000_000
