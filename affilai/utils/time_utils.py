"""
Time helpers.

All timestamps in ``affilai`` are timezone-aware UTC. SQLite stores them as
ISO-8601 text (``2026-01-31T12:00:00Z``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def parse_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a timestamp column written by SQLite's ``strftime`` default.

    Returns ``None`` for ``None``/empty input. Naive values are assumed UTC.
    """
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
