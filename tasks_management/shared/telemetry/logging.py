"""Logging configuration: one stdout handler, module loggers via get_logger."""

import logging
import sys

from tasks_management.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers kept at WARNING unless SQL echo is requested.
_SQL_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def setup_logging(level: int | None = None) -> None:
    """Configure root logging for the service.

    Args:
        level: Explicit level; defaults to DEBUG when settings.debug, else INFO.
    """
    settings = get_settings()
    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.database_echo:
        for name in _SQL_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
