"""
Elapsed-time humanization.

Durations are rendered with the coarsest fitting unit, truncated
(never rounded), plus at most one secondary unit:

    45      -> "45 seconds ago"
    600     -> "10 minutes ago"
    3600    -> "1 hour ago"
    5400    -> "1 hour and 30 minutes ago"
    90000   -> "1 day and 1 hour ago"

The secondary unit is dropped when it is zero.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from timesince.shared.storage.timestamps import to_utc

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def _unit(count: int, name: str) -> str:
    return f"{count} {name}" if count == 1 else f"{count} {name}s"


def elapsed_seconds(since: datetime, now: Optional[datetime] = None) -> int:
    """Whole seconds from `since` to `now`, clamped at zero."""

    if now is None:
        now = datetime.now(timezone.utc)
    delta = to_utc(now) - to_utc(since)
    return max(0, int(delta.total_seconds()))


def humanize_duration(seconds: int) -> str:
    seconds = int(seconds)
    if seconds < 0:
        raise ValueError("duration must be non-negative")

    if seconds < MINUTE:
        return f"{_unit(seconds, 'second')} ago"

    if seconds < HOUR:
        return f"{_unit(seconds // MINUTE, 'minute')} ago"

    if seconds < DAY:
        major, minor = divmod(seconds, HOUR)
        minor //= MINUTE
        parts = [_unit(major, "hour")]
        if minor:
            parts.append(_unit(minor, "minute"))
    else:
        major, minor = divmod(seconds, DAY)
        minor //= HOUR
        parts = [_unit(major, "day")]
        if minor:
            parts.append(_unit(minor, "hour"))

    return " and ".join(parts) + " ago"


def time_since(since: datetime, now: Optional[datetime] = None) -> str:
    return humanize_duration(elapsed_seconds(since, now))
