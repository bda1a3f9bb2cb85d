"""File logging for the interactive session.

The terminal is in raw alternate-screen mode while browsing, so log records
go to ``<user log dir>/lazyinspect.log`` instead of stderr.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyinspect"
LOG_FILENAME = f"{APP_NAME}.log"
DATA_ENV = "LAZYINSPECT_DATA"
LOG_LEVEL_ENV = "LAZYINSPECT_LOGLEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d %(message)s"


def log_directory() -> Path:
    """Return the log directory, honoring the ``LAZYINSPECT_DATA`` override."""
    override = os.environ.get(DATA_ENV, "").strip()
    if override:
        return Path(override)
    return Path(user_log_dir(APP_NAME, appauthor=False))


def resolve_level(level: str | None = None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def initialize_logging(level: str | None = None) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log file path, or ``None`` when the directory is not writable
    (logging then stays disabled rather than failing startup).
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(resolve_level(level))
    package_logger.propagate = False

    directory = log_directory()
    log_path = directory / LOG_FILENAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return log_path
