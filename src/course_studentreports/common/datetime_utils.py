from __future__ import annotations

import time
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


def now_timestamp() -> int:
    """Current unix time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return int(time.time())


def format_timestamp(value: int, fmt: str, tz_name: Optional[str] = None) -> str:
    """Format a unix timestamp in the given timezone (server local when None)."""
    tz = ZoneInfo(tz_name) if tz_name else None
    return datetime.fromtimestamp(int(value), tz=tz).strftime(fmt)


def format_time_ago(seconds: int) -> str:
    """Human readable duration, e.g. '2 days 3 hours'."""
    seconds = max(int(seconds), 0)
    units = (("day", 86400), ("hour", 3600), ("min", 60), ("sec", 1))
    parts: list[str] = []
    for name, size in units:
        count, seconds = divmod(seconds, size)
        if count:
            parts.append(f"{count} {name}{'s' if count != 1 else ''}")
        if len(parts) == 2:
            break
    return " ".join(parts) or "now"
