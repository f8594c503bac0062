"""
Command dispatch for the timesince CLI.

Each operation delegates to an EventStore and the duration formatter
and returns a CommandResult carrying the user-facing message.

Design rules:
- "already exists" / "not found" are soft outcomes (ok=False), never raised
- StoreError propagates untouched; the CLI owns fatal error reporting
- The clock is injectable so elapsed times are testable
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from timesince.shared.formatting.duration import elapsed_seconds, humanize_duration
from timesince.shared.formatting.style import Styler
from timesince.shared.formatting.table import render_table
from timesince.shared.logging.logger import get_logger
from timesince.shared.storage.event_store import EventStore

log = get_logger("core.commands")

SORT_NAME = "name"
SORT_RECENT = "recent"
SORT_CHOICES = (SORT_NAME, SORT_RECENT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str


class Commands:
    def __init__(
        self,
        store: EventStore,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        style: Optional[Styler] = None,
    ) -> None:
        self._store = store
        self._clock = clock or utc_now
        self._style = style or Styler(enabled=False)

    # -------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------

    def add(self, name: str) -> CommandResult:
        if self._store.get(name) is not None:
            log.info(f"add skipped; '{name}' already exists")
            return CommandResult(
                False,
                f"Event '{name}' already exists. Use 'did' to update it.",
            )

        self._store.upsert(name, self._clock())
        log.info(f"Added event '{name}'")

        s = self._style
        return CommandResult(True, f"{s('➕', 'bold', 'green')} '{s(name, 'underline')}' added!")

    def did(self, name: str) -> CommandResult:
        if self._store.get(name) is None:
            log.info(f"did skipped; '{name}' not found")
            return CommandResult(
                False,
                f"Event '{name}' not found. You can add it using the 'add' command",
            )

        self._store.upsert(name, self._clock())
        log.info(f"Marked event '{name}'")

        s = self._style
        return CommandResult(True, f"{s('✅', 'bold', 'blue')} '{s(name, 'underline')}' updated!")

    def remove(self, name: str) -> CommandResult:
        s = self._style
        if not self._store.remove(name):
            return CommandResult(
                False,
                f"'{s(name, 'italic', 'yellow')}' {s('not found.', 'red')}",
            )

        log.info(f"Removed event '{name}'")
        return CommandResult(True, f"{s('🗑', 'bold', 'red')} '{s(name, 'underline')}' removed!")

    # -------------------------------------------------
    # QUERIES
    # -------------------------------------------------

    def query(self, name: str) -> CommandResult:
        timestamp = self._store.get(name)
        if timestamp is None:
            return CommandResult(
                False,
                f"Event '{name}' not found. You can add it using the 'add' command",
            )

        s = self._style
        phrase = humanize_duration(elapsed_seconds(timestamp, self._clock()))
        return CommandResult(
            True,
            f"{s('Time since last', 'bold')} {s(name, 'green')} {s(phrase, 'bold')}",
        )

    def list(self, sort: str = SORT_NAME) -> CommandResult:
        if sort not in SORT_CHOICES:
            raise ValueError(f"unknown sort order: {sort!r}")

        events = self._store.load()
        if not events:
            return CommandResult(True, "No events found.")

        now = self._clock()
        elapsed = {name: elapsed_seconds(ts, now) for name, ts in events.items()}

        if sort == SORT_RECENT:
            names = sorted(elapsed, key=lambda n: (elapsed[n], n))
        else:
            names = sorted(elapsed)

        rows = [[name, humanize_duration(elapsed[name])] for name in names]
        table = render_table(
            ["Event", "Last Done"],
            rows,
            header_style=lambda h: self._style(h, "bold"),
        )
        return CommandResult(True, table)
