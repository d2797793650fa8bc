"""Time utilities: UTC wall clock, epoch milliseconds and ISO date parsing."""

from datetime import date, datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def epoch_ms() -> int:
    """Return milliseconds since the Unix epoch."""
    return int(now_utc().timestamp() * 1000)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Assume naive datetime is already UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_date(value: str) -> Optional[date]:
    """
    Parse an ISO-like date string ("2024-01-01" or a full timestamp).

    Returns None when the value cannot be parsed.
    """
    if not value or not value.strip():
        return None
    try:
        return date_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def isoformat_utc(dt: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision."""
    dt = to_utc(dt) if dt else now_utc()
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
