"""Time utilities for the domain layer.

All datetimes handed to the transfer port are timezone-aware UTC.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Union

DateLike = Union[date, datetime]


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def as_utc_datetime(value: DateLike) -> datetime:
    """Datetimes pass through ensure_tz_aware(); plain dates become UTC midnight."""
    if isinstance(value, datetime):
        return ensure_tz_aware(value)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def file_timestamp(dt: datetime | None = None) -> str:
    """Sortable timestamp for file names, down to microseconds."""
    return (dt or utc_now()).strftime("%Y%m%dT%H%M%S%f")
