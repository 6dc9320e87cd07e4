"""Logging configuration for Hytale Backup.

Every module logs through a child of the "hytale_backup" logger obtained
with get_logger(). setup_logging() attaches the handlers once at startup:
a size-capped log file in the config directory, plus the console when
the app is started with --debug.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "hytale_backup"
LOG_FILE_NAME = "hytale_backup.log"

# Keeps a few runs of history without growing forever
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure application-wide logging.

    Calling it again replaces the handlers from the previous call.

    Args:
        debug: If True, also log to the console at DEBUG level
        log_dir: Directory for the log file, defaults to the config directory

    Returns:
        The application's root logger
    """
    if log_dir is None:
        from .config.paths import AppPaths
        log_dir = AppPaths.config_dir()

    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'archive_writer', 'inventory')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
