"""Epoch-millisecond conversions and local-time formatting.

All conversions use naive datetimes in the process timezone, so "today" and
the hour labels follow whatever local time the monitor runs under.
"""

from __future__ import annotations

from datetime import datetime

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000)


def format_hour(ms: int) -> str:
    """Local wall-clock hour, e.g. '07:00'. Empty when ms is out of range."""
    try:
        return from_epoch_ms(ms).strftime("%H:00")
    except (ValueError, OverflowError, OSError):
        return ""


def format_short(ms: int) -> str:
    """Short local timestamp, e.g. 'Mar 4 09:15' (no leading zero on the day).

    Returns an empty string when ms cannot be represented as a datetime.
    """
    try:
        dt = from_epoch_ms(ms)
    except (ValueError, OverflowError, OSError):
        return ""
    return f"{dt.strftime('%b')} {dt.day} {dt.strftime('%H:%M')}"
