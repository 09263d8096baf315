"""Evaluation tracing for boxopt.

Debug mode makes the callback adapter log every objective evaluation on the
``boxopt.adapter`` logger at DEBUG level. Turning it on pins that logger (and
its handlers) to DEBUG; turning it off hands it back to the package level.
It starts on when the ``BOXOPT_DEBUG`` environment variable is truthy.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Sequence

from .logging import get_logger, pin_level, unpin_level

_DEBUG_ENV_VAR = "BOXOPT_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")
TRACE_LOGGER = "boxopt.adapter"

_trace = get_logger(TRACE_LOGGER)
_debug_enabled = False


def _switch(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = bool(enabled)
    if _debug_enabled:
        pin_level(TRACE_LOGGER, logging.DEBUG)
    else:
        unpin_level(TRACE_LOGGER)


def is_debug_enabled() -> bool:
    """Return whether evaluations are currently traced."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable boxopt debug mode.

    Parameters
    ----------
    enabled:
        Whether to trace every objective evaluation at DEBUG level.
    """
    _switch(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Trace evaluations (or silence the trace) for the duration of a block.

    Example
    -------
    >>> with debug_context(True):
    ...     pass
    """
    prev = _debug_enabled
    _switch(enabled)
    try:
        yield
    finally:
        _switch(prev)


def trace_evaluation(nfev: int, params: Sequence[float], score: float) -> None:
    """Log one objective evaluation when debug mode is on."""
    if _debug_enabled:
        _trace.debug("eval #%d f(%s) = %.10g", nfev, list(params), score)


if os.getenv(_DEBUG_ENV_VAR, "0").lower() in _TRUTHY:
    _switch(True)


__all__ = [
    "TRACE_LOGGER",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
    "trace_evaluation",
]
