"""
RFC-3339 timestamp codec for the event store.

Earlier releases of the store wrote nanosecond precision
(e.g. 2024-01-01T08:15:30.123456789Z). datetime only carries
microseconds, so extra fractional digits are truncated on read.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

_RFC3339 = re.compile(
    r"""
    ^(?P<date>\d{4}-\d{2}-\d{2})
    [Tt ]
    (?P<time>\d{2}:\d{2}:\d{2})
    (?:\.(?P<fraction>\d+))?
    (?P<offset>[Zz]|[+-]\d{2}:?\d{2})?$
    """,
    re.VERBOSE,
)


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC-3339 / ISO-8601 string into an aware UTC datetime."""

    if not isinstance(text, str):
        raise ValueError(f"timestamp must be a string, got {type(text).__name__}")

    match = _RFC3339.match(text.strip())
    if not match:
        raise ValueError(f"invalid timestamp: {text!r}")

    normalized = f"{match['date']}T{match['time']}"

    fraction = match["fraction"]
    if fraction:
        normalized += "." + fraction[:6].ljust(6, "0")

    offset = match["offset"]
    if offset and offset not in ("Z", "z"):
        if ":" not in offset:
            offset = f"{offset[:3]}:{offset[3:]}"
        normalized += offset

    try:
        parsed = datetime.fromisoformat(normalized)
        return to_utc(parsed)
    except OverflowError as e:
        raise ValueError(f"invalid timestamp: {text!r}") from e


def format_timestamp(value: datetime) -> str:
    """Render a datetime as an RFC-3339 UTC string with a Z suffix."""

    return to_utc(value).isoformat().replace("+00:00", "Z")


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
