"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

from focus_tui.utils.constants import APP_NAME

_LOG_FILE = "focus_tui.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_logger: logging.Logger | None = None


def _file_handler() -> logging.Handler:
    log_dir = Path(user_log_dir(APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, initialising it on first call.

    The full-screen UI owns the terminal, so records only ever go to the
    rotating log file. Pass *name* to get a child logger of the app logger.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(APP_NAME)
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            logger.addHandler(_file_handler())
        logger.propagate = False

        _logger = logger

    if name:
        return _logger.getChild(name)
    return _logger
