"""
Event store validation script.

Validates a timesince data file against the bundled JSON schema and
the timestamp codec, without modifying it.

Design rules:
- No side effects on import
- Validation only (no mutation)
- Defaults to the same data file the CLI would use
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from timesince.errors import TimesinceError
from timesince.shared.config.settings import Settings
from timesince.shared.storage.event_store import validate_document
from timesince.shared.storage.timestamps import parse_timestamp


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------

def _error(msg: str):
    print(f"[STORE ERROR] {msg}", file=sys.stderr)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a timesince data file")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Data file to check (default: the file the CLI uses)",
    )
    return parser.parse_args(argv)


# ------------------------------------------------------------
# Validators
# ------------------------------------------------------------

def validate_store_file(path: Path) -> List[str]:
    """
    Return every problem found in the data file at `path`.

    A missing file is valid: it is the empty store.
    """

    if not path.exists():
        return []

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return [f"{path.name}: invalid JSON ({e})"]

    problems = validate_document(payload)
    if problems or not isinstance(payload, dict):
        return problems

    for name, value in payload.items():
        try:
            parse_timestamp(value)
        except ValueError as e:
            problems.append(f"{name}: {e}")

    return problems


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        path = args.path or Settings.from_env().data_file
    except TimesinceError as e:
        _error(str(e))
        return 1

    problems = validate_store_file(path)
    if problems:
        for problem in problems:
            _error(problem)
        print("Store validation failed.", file=sys.stderr)
        return 1

    if path.exists():
        count = len(json.loads(path.read_text(encoding="utf-8")))
        print(f"Store validation passed: {count} event(s) in {path}")
    else:
        print(f"Store validation passed: {path} does not exist yet (empty store)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
