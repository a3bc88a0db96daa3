from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from confloc.config import Settings, load_settings

PACKAGE_LOGGER = "confloc"
_CONFIGURED_ATTR = "_confloc_logging_configured"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _file_handler(log_file: Path, max_bytes: int, backup_count: int) -> logging.Handler | None:
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"Failed to open confloc log file at {log_file}: {exc}\n")
        return None


def configure_confloc_logging(
    log_file: Path | None = None,
    *,
    level: int | None = None,
    settings: Settings | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 10,
) -> logging.Logger:
    """Give the ``confloc`` loggers their own handlers.

    Arguments left unset come from ``CONFLOC_LOG_FILE`` and
    ``CONFLOC_LOG_LEVEL``. Only the package logger is touched, so the host
    application's root logger stays as it is. Repeated calls are no-ops.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(package_logger, _CONFIGURED_ATTR, False):
        return package_logger

    settings = settings or load_settings()
    if log_file is None:
        log_file = settings.log_file
    if level is None:
        level = settings.log_level

    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stderr)]
    if log_file is not None:
        file_handler = _file_handler(log_file, max_bytes, backup_count)
        if file_handler is not None:
            handlers.append(file_handler)

    formatter = logging.Formatter(_LOG_FORMAT)
    package_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    setattr(package_logger, _CONFIGURED_ATTR, True)
    return package_logger


def reset_confloc_logging() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    if hasattr(package_logger, _CONFIGURED_ATTR):
        delattr(package_logger, _CONFIGURED_ATTR)
