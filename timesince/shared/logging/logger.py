import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LEVEL = logging.WARNING

_LOGGERS = {}
_CONSOLE_LEVEL = DEFAULT_LEVEL
_LOG_DIR: Optional[Path] = None
_RUN_STAMP = datetime.now().strftime("%Y%m%d-%H%M%S")


def _resolve_level(value) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        level = logging.getLevelName(value.strip().upper())
        if isinstance(level, int):
            return level
    return DEFAULT_LEVEL


def _attach_file_handler(logger: logging.Logger, runtime: str) -> None:
    if _LOG_DIR is None:
        return

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return

    _LOG_DIR.mkdir(parents=True, exist_ok=True)
    logfile = _LOG_DIR / f"{runtime}-{_RUN_STAMP}.log"

    file_handler = logging.FileHandler(logfile, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)


def get_logger(
    name: str,
    *,
    runtime: str = "timesince",
) -> logging.Logger:
    """
    Create or retrieve a named logger.

    Parameters:
    - name: logger namespace (e.g. shared.event_store, core.commands)
    - runtime: log file prefix when file logging is enabled

    Console output goes to stderr so it never mixes with command output.
    A per-run log file is only written once configure_logging() has been
    given a log directory.
    """
    cache_key = f"{runtime}:{name}"
    if cache_key in _LOGGERS:
        return _LOGGERS[cache_key]

    logger = logging.getLogger(cache_key)
    logger.setLevel(logging.DEBUG)

    # ------------------------------
    # Console handler
    # ------------------------------
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    console.setLevel(_CONSOLE_LEVEL)
    logger.addHandler(console)

    # ------------------------------
    # File handler (one per run)
    # ------------------------------
    _attach_file_handler(logger, runtime)

    logger.propagate = False
    _LOGGERS[cache_key] = logger

    return logger


def configure_logging(
    *,
    level=None,
    log_dir: Path | str | None = None,
) -> None:
    """
    Apply CLI/environment logging settings to every logger created so far
    and to loggers created later.
    """
    global _CONSOLE_LEVEL, _LOG_DIR

    _CONSOLE_LEVEL = _resolve_level(
        level if level is not None else os.getenv("TIMESINCE_LOG_LEVEL")
    )
    if log_dir:
        _LOG_DIR = Path(log_dir).expanduser()

    for cache_key, logger in _LOGGERS.items():
        for handler in logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(_CONSOLE_LEVEL)
        _attach_file_handler(logger, cache_key.split(":", 1)[0])
