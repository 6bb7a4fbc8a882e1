"""Logging setup shared by the window and the command line tool."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import config

LOGGER_NAME = "logo_atlas"


def default_log_file() -> Path:
    """Return the log file path, honouring ``LOGO_ATLAS_LOG_DIR``."""
    directory = os.environ.get(config.LOG_DIR_ENV)
    base = Path(directory) if directory else Path.home() / ".logo_atlas"
    return base / config.LOG_FILENAME


def configure_logging(
    log_file: Optional[Path] = None, level: int = logging.INFO
) -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent to avoid duplicate handlers when the module
    is imported multiple times (e.g., in tests). When *log_file* is given a
    rotating file handler limits on-disk log growth; output is always mirrored
    to stdout.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger


def install_excepthook(logger: logging.Logger) -> None:
    """Log uncaught exceptions before handing them to the default hook."""

    def global_exception_handler(exc_type, value, tb):
        logger.error("Uncaught exception", exc_info=(exc_type, value, tb))
        sys.__excepthook__(exc_type, value, tb)

    sys.excepthook = global_exception_handler
