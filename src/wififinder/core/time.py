"""
Timestamp helpers.

Wi-Fi observations carry an ISO-8601 `last_seen` string. We always produce
timezone-aware UTC timestamps so strings compare and parse consistently across
API/CLI output.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_z(dt: datetime) -> str:
    """Format as ISO-8601 with millisecond precision and a trailing `Z`."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def iso_ago(now: datetime, *, seconds: float) -> str:
    """ISO timestamp for `seconds` before `now`."""
    return isoformat_z(now - timedelta(seconds=seconds))

