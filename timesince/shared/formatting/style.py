"""
Minimal ANSI styling for console output.

Styling is applied only when enabled; callers decide based on
settings (NO_COLOR, --no-color) and whether stdout is a terminal.
"""

from __future__ import annotations

import sys
from typing import TextIO

_CODES = {
    "bold": "1",
    "italic": "3",
    "underline": "4",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
}


class Styler:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    @classmethod
    def for_stream(cls, stream: TextIO = sys.stdout, *, color: bool = True) -> "Styler":
        isatty = getattr(stream, "isatty", None)
        return cls(enabled=bool(color and isatty and isatty()))

    def __call__(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles:
            return text
        codes = ";".join(_CODES[s] for s in styles)
        return f"\x1b[{codes}m{text}\x1b[0m"
