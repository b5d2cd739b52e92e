"""Millisecond clock and calendar conversion utilities."""

import time
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_millis():
    """Current time in milliseconds since Unix epoch."""
    return time.time_ns() // 1_000_000


def format_timestamp(epoch_ms=None):
    """Format timestamp as ISO 8601 with milliseconds."""
    if epoch_ms is None:
        epoch_ms = now_millis()

    dt = EPOCH + timedelta(milliseconds=epoch_ms)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{epoch_ms % 1000:03d}Z"


def datetime_to_millis(dt, is_utc=True):
    """Milliseconds since epoch for ``dt``.

    Naive datetimes are read as UTC when ``is_utc`` is true and as local
    time otherwise; aware datetimes carry their own offset.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc) if is_utc else dt.astimezone()
    delta = dt - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def millis_to_datetime(epoch_ms, is_utc=True):
    """Aware datetime for ``epoch_ms``, in UTC or in the local zone.

    Raises OverflowError past the range ``datetime`` can represent.
    """
    dt = EPOCH + timedelta(milliseconds=epoch_ms)
    return dt if is_utc else dt.astimezone()
