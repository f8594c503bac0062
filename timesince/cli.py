"""
timesince command-line entry point.

    timesince <event>            how long since <event>
    timesince add <event>        start tracking <event> as of now
    timesince did <event>        mark <event> as done now (alias: mark)
    timesince remove <event>     stop tracking <event>
    timesince list               every event with time since last done

Exit status: 0 on success and on soft "not found" / "already exists"
outcomes, 1 on fatal store errors, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from timesince.core.commands import SORT_CHOICES, SORT_NAME, Commands
from timesince.errors import TimesinceError
from timesince.runtime.version import DESCRIPTION, as_string
from timesince.shared.config.settings import Settings
from timesince.shared.formatting.style import Styler
from timesince.shared.logging.logger import configure_logging, get_logger
from timesince.shared.storage.event_store import EventStore

log = get_logger("cli")

COMMANDS = ("add", "did", "mark", "remove", "list", "query")


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timesince",
        description=DESCRIPTION,
        epilog=(
            "Record events (like 'workout', 'meditate') and then check how "
            "long it's been since you did them. Run 'timesince <event>' to "
            "query a single event."
        ),
    )
    parser.add_argument("--version", action="version", version=as_string())
    parser.add_argument(
        "--data-file",
        help="Path of the event store (default: <config dir>/timesince/data.json)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable styled output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log store activity to stderr",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = sub.add_parser("add", help="Add a new event and set its timestamp to now")
    add.add_argument("event", help="The name of the event to add")

    did = sub.add_parser(
        "did",
        aliases=["mark"],
        help="Mark an existing event as done now",
    )
    did.add_argument("event", help="The name of the existing event to mark as done")

    remove = sub.add_parser("remove", help="Remove an event")
    remove.add_argument("event", help="The name of the event to remove")

    listing = sub.add_parser(
        "list",
        help="Display all tracked events with time since they were last updated",
    )
    listing.add_argument(
        "--sort",
        choices=SORT_CHOICES,
        default=SORT_NAME,
        help="Order rows by event name or most recent first (default: name)",
    )

    query = sub.add_parser("query", help="Show time since an event was last done")
    query.add_argument("event", help="The event name to query (e.g., 'reading')")

    return parser


def _normalize_argv(argv: Sequence[str]) -> List[str]:
    """
    Route a bare event name to the query subcommand.

    `timesince reading` becomes `timesince query reading`; global
    options before the event name are left in place.
    """
    args = list(argv)
    idx = 0
    while idx < len(args):
        token = args[idx]
        if token == "--data-file":
            idx += 2
            continue
        if token.startswith("-"):
            idx += 1
            continue
        if token not in COMMANDS:
            args.insert(idx, "query")
        break
    return args


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))

    if args.command is None:
        parser.error("Need an event name or a command")

    if hasattr(args, "event"):
        args.event = args.event.strip()
        if not args.event:
            parser.error("event name must not be empty")

    return args


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------

def run(args: argparse.Namespace, settings: Settings) -> int:
    store = EventStore(settings.data_file)
    commands = Commands(
        store,
        style=Styler.for_stream(sys.stdout, color=settings.color),
    )
    log.debug(f"Running '{args.command}' against {store.path}")

    if args.command == "add":
        result = commands.add(args.event)
    elif args.command in ("did", "mark"):
        result = commands.did(args.event)
    elif args.command == "remove":
        result = commands.remove(args.event)
    elif args.command == "list":
        result = commands.list(sort=args.sort)
    else:
        result = commands.query(args.event)

    print(result.message)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.from_env().with_overrides(
            data_file=args.data_file,
            no_color=args.no_color,
            verbose=args.verbose,
        )
        configure_logging(level=settings.log_level, log_dir=settings.log_dir)
        return run(args, settings)
    except TimesinceError as e:
        log.debug(f"Aborting: {e}", exc_info=True)
        print(f"timesince: error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
