"""Version metadata for timesince.

This module is import-safe and exposes authoritative version identifiers for
the CLI and packaging without executing side effects on import.
"""

from __future__ import annotations

PROJECT_NAME = "timesince"
VERSION = "0.3.0"
DESCRIPTION = "A CLI tool to track how long it's been since you last did something"

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DESCRIPTION",
    "as_string",
]


def as_string() -> str:
    """Return a concise version string."""

    return f"{PROJECT_NAME} {VERSION}"
