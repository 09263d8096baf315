"""Logging utilities for boxopt.

Every module obtains its logger through :func:`get_logger` so that engine
handle lifetimes, run outcomes and per-evaluation traces share one format and
one level switch. The package level starts at ``BOXOPT_LOG_LEVEL`` (default
WARNING). Individual loggers can be pinned to a lower level, which is how
debug mode opens the evaluation trace without touching the rest of the
package.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_LEVEL_ENV_VAR = "BOXOPT_LOG_LEVEL"
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.WARNING
    return level


_package_level = _coerce_level(os.getenv(_LEVEL_ENV_VAR, "WARNING"))

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}
# Loggers held at or below a level regardless of the package level
_pinned: dict[str, int] = {}


def _qualify(name: Optional[str]) -> str:
    if name is None:
        return "boxopt"
    if name == "boxopt" or name.startswith("boxopt."):
        return name
    return f"boxopt.{name}"


def _level_for(logger_name: str) -> int:
    pinned = _pinned.get(logger_name)
    if pinned is None:
        return _package_level
    return min(pinned, _package_level)


def _apply_level(logger: logging.Logger) -> None:
    level = _level_for(logger.name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger under the ``boxopt`` namespace.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from boxopt.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("starting run")
    """
    logger_name = _qualify(name)
    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    _apply_level(logger)

    _loggers[logger_name] = logger
    return logger


def pin_level(name: str, level: int | str) -> None:
    """Keep logger ``name`` at ``level`` or lower until :func:`unpin_level`.

    Later calls to :func:`set_log_level` and :func:`configure_logging` only
    raise the logger's level back above ``level`` once it is unpinned.
    """
    logger = get_logger(name)
    _pinned[logger.name] = _coerce_level(level)
    _apply_level(logger)


def unpin_level(name: str) -> None:
    """Return logger ``name`` to the package level."""
    logger = get_logger(name)
    _pinned.pop(logger.name, None)
    _apply_level(logger)


def set_log_level(level: int | str) -> None:
    """Set the logging level for all boxopt loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, ...) or its
            name as a string.
    """
    global _package_level
    _package_level = _coerce_level(level)
    for logger in _loggers.values():
        _apply_level(logger)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for boxopt.

    Replaces the handlers of every cached logger with a single stream handler.
    Typically called once at application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).

    Example:
        >>> from boxopt.logging import configure_logging
        >>> import logging
        >>> configure_logging(level=logging.INFO)
    """
    if stream is None:
        stream = sys.stderr
    formatter = logging.Formatter(format_string or _FORMAT)

    for logger in _loggers.values():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    set_log_level(level)


__all__ = [
    "configure_logging",
    "get_logger",
    "pin_level",
    "set_log_level",
    "unpin_level",
]
