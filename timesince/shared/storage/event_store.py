"""
JSON-backed event store.

The store is a flat JSON object mapping event name to the RFC-3339 UTC
timestamp of its last occurrence:

    {
      "workout": "2024-01-01T00:00:00Z",
      "reading": "2024-01-03T21:40:12.500000Z"
    }

Design rules:
- No envelope fields; the flat shape is shared with earlier releases
- Every mutation is a full read-modify-write of the whole file
- Writes are atomic (temp file + rename in the same directory)
- No locking: concurrent invocations may lose updates (last writer wins)
- Missing file == empty store; a corrupt file is a StoreError
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsonschema import Draft7Validator

from timesince.errors import StoreError
from timesince.shared.logging.logger import get_logger
from timesince.shared.storage.timestamps import (
    format_timestamp,
    parse_timestamp,
    to_utc,
)

log = get_logger("shared.event_store")

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "schemas" / "events.schema.json"

_VALIDATOR: Optional[Draft7Validator] = None


def get_validator() -> Draft7Validator:
    global _VALIDATOR
    if _VALIDATOR is None:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        _VALIDATOR = Draft7Validator(schema)
    return _VALIDATOR


def validate_document(payload: Any) -> List[str]:
    """Return human-readable schema violations for a raw store document."""

    errors = sorted(
        get_validator().iter_errors(payload),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    messages = []
    for error in errors:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


@dataclass(frozen=True)
class EventRecord:
    name: str
    last_occurrence: datetime


class EventStore:
    """
    Explicit handle on one data file.

    Construct once per invocation and pass it to whatever needs it;
    nothing is cached between operations.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    def __repr__(self) -> str:
        return f"EventStore({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def load(self) -> Dict[str, datetime]:
        if not self._path.exists():
            log.debug(f"No store at {self._path}; starting empty")
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StoreError(f"Failed to parse your events file {self._path}: {e}") from e
        except OSError as e:
            raise StoreError(f"Failed to read your events from {self._path}: {e}") from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Failed to parse your events file {self._path}: {e}") from e

        problems = validate_document(payload)
        if problems:
            raise StoreError(
                f"Failed to parse your events file {self._path}: {problems[0]}"
            )

        events: Dict[str, datetime] = {}
        for name, value in payload.items():
            try:
                events[name] = parse_timestamp(value)
            except ValueError as e:
                raise StoreError(
                    f"Failed to parse your events file {self._path}: {name}: {e}"
                ) from e

        log.debug(f"Loaded {len(events)} event(s) from {self._path}")
        return events

    def save(self, events: Mapping[str, datetime]) -> None:
        payload = {name: format_timestamp(ts) for name, ts in sorted(events.items())}

        try:
            self._write_atomic(payload)
        except OSError as e:
            raise StoreError(f"Failed to write data to {self._path}: {e}") from e

        log.debug(f"Saved {len(payload)} event(s) to {self._path}")

    def _write_atomic(self, payload: Dict[str, str]) -> None:
        serialized = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp = tempfile.NamedTemporaryFile(
            "w",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            delete=False,
            encoding="utf-8",
        )
        temp_path = Path(tmp.name)

        try:
            with tmp:
                tmp.write(serialized)
                tmp.flush()
                os.fsync(tmp.fileno())
            temp_path.replace(self._path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get(self, name: str) -> Optional[datetime]:
        return self.load().get(name)

    def records(self) -> List[EventRecord]:
        return [
            EventRecord(name=name, last_occurrence=ts)
            for name, ts in self.load().items()
        ]

    def upsert(self, name: str, timestamp: datetime) -> None:
        events = self.load()
        events[name] = to_utc(timestamp)
        self.save(events)

    def remove(self, name: str) -> bool:
        events = self.load()
        if name not in events:
            return False

        del events[name]
        self.save(events)
        return True
