"""Datetime helpers. All timestamps are handled as timezone-aware UTC."""

from datetime import datetime, timezone
from typing import Any, Optional


def ensure_utc(dt: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are assumed to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Get the current time in UTC."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored datetime value.

    SQLite hands back ISO strings; a trailing "Z" is accepted as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None
