"""Logging setup for LinkScout.

Console output goes to *stderr*; stdout carries only the broken-link report.
Modules log through :func:`get_logger`, which returns children of the
``LinkScout`` logger, so one :func:`init_logging` call configures them all.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "LinkScout"
_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``LinkScout`` logger.

    *log_file*, when given, adds a rotating file (5 MB x 3) next to stderr.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the project logger or its child ``LinkScout.<name>``."""
    return logging.getLogger(LOGGER_NAME if not name else f"{LOGGER_NAME}.{name}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "get_logger", "LOGGER_NAME"]
