"""Logging utilities for cgdescent.

Every module obtains its logger through :func:`get_logger`, so the whole
package writes under one ``cgdescent.*`` namespace with a shared format and
level. Nothing is emitted below WARNING unless the level is lowered; the
engine reports per-iteration progress at DEBUG and its termination reason at
INFO.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE = "cgdescent"

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _qualify(name: Optional[str]) -> str:
    if not name or name == PACKAGE:
        return PACKAGE
    if name.startswith(PACKAGE + "."):
        return name
    return f"{PACKAGE}.{name}"


def _attach_handler(
    logger: logging.Logger, stream: TextIO, level: int, formatter: logging.Formatter
) -> None:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Args:
        name: Usually ``__name__``. Names outside the package are placed under
            ``cgdescent.``; None returns the package logger.

    Returns:
        Cached logger writing to stderr, not propagating to the root logger.

    Example:
        >>> from cgdescent.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("bracket [%g, %g]", 0.0, 1.0)
    """
    qualified = _qualify(name)
    cached = _loggers.get(qualified)
    if cached is not None:
        return cached

    logger = logging.getLogger(qualified)
    if not logger.handlers:
        logger.setLevel(_level)
        _attach_handler(logger, sys.stderr, _level, logging.Formatter(_DEFAULT_FORMAT))
        logger.propagate = False

    _loggers[qualified] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every cgdescent logger, including ones created later.

    Args:
        level: A ``logging`` constant or its name, e.g. ``"DEBUG"``.
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Route all cgdescent loggers to ``stream`` with a common format.

    Replaces the handlers of every logger created so far; typically called
    once at application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format; defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).
    """
    global _level
    _level = _coerce_level(level)
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        _attach_handler(logger, stream or sys.stderr, _level, formatter)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
