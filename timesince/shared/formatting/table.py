"""Box-drawn table rendering for the `list` command."""

from __future__ import annotations

import unicodedata
from typing import Callable, List, Sequence

# UTF-8 full border preset.
_TOP = ("┌", "─", "┬", "┐")
_HEADER_RULE = ("╞", "═", "╪", "╡")
_ROW_RULE = ("├", "╌", "┼", "┤")
_BOTTOM = ("└", "─", "┴", "┘")
_VERTICAL = "│"
_INNER = "┆"


def display_width(text: str) -> int:
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def _rule(parts, widths: Sequence[int]) -> str:
    left, fill, join, right = parts
    return left + join.join(fill * (w + 2) for w in widths) + right


def _line(cells: Sequence[str], widths: Sequence[int], decorate) -> str:
    rendered = []
    for cell, width in zip(cells, widths):
        padding = " " * (width - display_width(cell))
        rendered.append(f" {decorate(cell)}{padding} ")
    return _VERTICAL + _INNER.join(rendered) + _VERTICAL


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    header_style: Callable[[str], str] = lambda s: s,
) -> str:
    """
    Render rows under a header using box-drawing characters.

    `header_style` decorates header text (e.g. bold) without
    affecting column width calculations.
    """
    widths: List[int] = [display_width(h) for h in headers]
    for row in rows:
        if len(row) != len(headers):
            raise ValueError("row length does not match header length")
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], display_width(cell))

    lines = [_rule(_TOP, widths), _line(headers, widths, header_style)]
    lines.append(_rule(_HEADER_RULE, widths))
    for idx, row in enumerate(rows):
        if idx:
            lines.append(_rule(_ROW_RULE, widths))
        lines.append(_line(row, widths, lambda s: s))
    lines.append(_rule(_BOTTOM, widths))
    return "\n".join(lines)
