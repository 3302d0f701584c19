"""
Logging utilities for fareversion.

Every fareversion logger lives under the ``fareversion`` namespace. The
library never configures logging on import; the CLI calls
:func:`setup_logging` once per invocation with a level derived from the
``-v`` count (see :func:`level_for_verbosity`).

The resolver itself does not log. Loading, configuration and the commands
do.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from fareversion.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "fareversion"

_logging_configured: bool = False
_lock = threading.Lock()


def _colors_allowed(stream: Optional[IO[str]] = None) -> bool:
    """Return True if ANSI colors may be written to ``stream``."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    target = stream or sys.stderr
    try:
        return target.isatty()
    except (AttributeError, OSError, ValueError):
        return False


class ColoredFormatter(logging.Formatter):
    """Formatter that tints the level name with an ANSI color.

    The record itself is left untouched so other handlers attached to the
    same logger still see the plain level name.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname) if self.use_color else None
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level.

    0 → WARNING, 1 → INFO, 2 or more → DEBUG.
    """
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    *,
    level: int = logging.WARNING,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Attach a single stream handler to the ``fareversion`` logger.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        level: Logging level for the package logger and its handler.
        verbose: Use the verbose format with timestamps and logger names.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.handlers.clear()
        package_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=_colors_allowed(stream),
            )
        )

        package_logger.addHandler(handler)
        package_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the ``fareversion`` namespace.

    ``get_logger("config")`` and ``get_logger("fareversion.config")`` return
    the same logger.
    """
    if not name or name == ROOT_LOGGER_NAME:
        qualified = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        qualified = name
    else:
        qualified = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(qualified)

    # Library-safe default when nobody configured logging
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if :func:`setup_logging` has run."""
    return _logging_configured


def disable_logging() -> None:
    """Silence all fareversion logging output."""
    global _logging_configured

    with _lock:
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.handlers.clear()
        package_logger.addHandler(logging.NullHandler())
        package_logger.setLevel(logging.NOTSET)
        _logging_configured = False
