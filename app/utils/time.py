"""
Canonical timestamp handling for stored measurements.
All reads that sort or compare timestamps should use parse_to_utc_aware.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def now_utc() -> datetime:
    """Current UTC time as a naive datetime, the form SQLite columns hold."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_to_utc_aware(ts: Any) -> datetime:
    """
    Convert a timestamp (string/datetime/None) to timezone-aware UTC datetime.
    - naive datetime -> assume UTC
    - iso string without tz -> assume UTC
    - iso string with tz -> convert to UTC
    """
    if ts is None:
        return datetime.min.replace(tzinfo=timezone.utc)

    if isinstance(ts, datetime):
        return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)

    s = str(ts).strip().replace("Z", "+00:00")
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt


def iso_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return parse_to_utc_aware(dt).isoformat()
