"""Logging utilities for filesniff commands."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from filesniff.config.models import LoggingSettings

_LOGGER_NAME = "filesniff"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the filesniff hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    settings: LoggingSettings | None = None, *, verbose: bool = False
) -> logging.Logger:
    """Configure the filesniff logger with stderr output and an optional rotating file."""
    settings = settings or LoggingSettings()
    level = logging.DEBUG if verbose else getattr(logging, settings.level)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[filesniff] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if settings.file:
        log_path = Path(settings.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max(1, settings.max_size_mb) * 1024 * 1024,
            backupCount=max(0, settings.backup_count),
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
