"""Logging configuration with daily file rotation."""
from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "ebike-rental.log"

NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "uvicorn.access",
)


def configure_logging(config: Settings, *, to_file: bool = True) -> logging.Logger:
    """Configure root logging for the service and return the package logger.

    The file handler rotates at midnight and keeps ``log_retention_days`` old files,
    each suffixed with its date (``ebike-rental.log.2025-06-01``).
    """

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: list[logging.Handler] = []
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers.append(console)

    if to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            config.log_dir / LOG_FILE_NAME,
            when="midnight",
            backupCount=config.log_retention_days,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger("ebike_rental")
