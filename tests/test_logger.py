import logging

from timesince.shared.logging import logger as logger_module
from timesince.shared.logging.logger import configure_logging, get_logger


def _console_handlers(logger):
    return [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]


def test_get_logger_is_cached():
    assert get_logger("tests.cached") is get_logger("tests.cached")


def test_logger_is_namespaced_and_isolated():
    logger = get_logger("tests.namespace")

    assert logger.name == "timesince:tests.namespace"
    assert logger.propagate is False


def test_configure_logging_sets_console_level(monkeypatch):
    monkeypatch.setattr(logger_module, "_LOG_DIR", None)
    logger = get_logger("tests.level")

    configure_logging(level="DEBUG")
    assert all(h.level == logging.DEBUG for h in _console_handlers(logger))

    configure_logging(level="not-a-level")
    assert all(h.level == logging.WARNING for h in _console_handlers(logger))


def test_log_dir_adds_file_handler(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "_LOG_DIR", None)
    logger = get_logger("tests.file")

    configure_logging(level="WARNING", log_dir=tmp_path / "logs")
    logger.debug("written to file only")
    for handler in logger.handlers:
        handler.flush()

    files = list((tmp_path / "logs").glob("timesince-*.log"))
    assert len(files) == 1
    assert "written to file only" in files[0].read_text(encoding="utf-8")

    for cached in logger_module._LOGGERS.values():
        for handler in [h for h in cached.handlers if isinstance(h, logging.FileHandler)]:
            cached.removeHandler(handler)
            handler.close()
