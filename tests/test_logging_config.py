from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import pytest

from hytale_backup.logging_config import LOG_FILE_NAME, get_logger, setup_logging


@pytest.fixture
def app_logger():
    logger = logging.getLogger("hytale_backup")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


def test_child_loggers_write_to_log_file(tmp_path: Path, app_logger: logging.Logger) -> None:
    setup_logging(log_dir=tmp_path / "config")

    get_logger("archive_writer").info("Backup of 'Orbis' finished")
    for handler in app_logger.handlers:
        handler.flush()

    text = (tmp_path / "config" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "hytale_backup.archive_writer - INFO - Backup of 'Orbis' finished" in text


def test_debug_adds_console_handler(tmp_path: Path, app_logger: logging.Logger) -> None:
    setup_logging(debug=True, log_dir=tmp_path)

    kinds = sorted(type(h).__name__ for h in app_logger.handlers)
    assert kinds == ["RotatingFileHandler", "StreamHandler"]


def test_repeated_setup_replaces_handlers(tmp_path: Path, app_logger: logging.Logger) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    assert len(app_logger.handlers) == 1
    assert isinstance(app_logger.handlers[0], logging.handlers.RotatingFileHandler)


def test_get_logger_name() -> None:
    assert get_logger("inventory").name == "hytale_backup.inventory"
