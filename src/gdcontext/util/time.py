from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def to_unix(dt: datetime) -> int:
    """Convert a tz-aware datetime to whole unix seconds (sub-second part dropped)."""
    return int(normalize_dt(dt).timestamp())


def from_unix(value: int) -> datetime:
    """Convert unix seconds into a tz-aware UTC datetime."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("unix timestamp must be an int")
    return datetime.fromtimestamp(value, tz=timezone.utc)
