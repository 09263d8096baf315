"""Bridge between the engine callback and a user objective.

The engine calls ``f(x, grad)`` with a parameter array. Users write objectives
as functions of ``N`` separate scalars, e.g. ``lambda a, b: (a - 1) ** 2 + b ** 2``.
:class:`ObjectiveAdapter` sits in between: it polls the stop predicate,
unpacks the array into positional arguments, tracks the best point seen and
keeps objective exceptions away from the engine until the run is over.
"""

from __future__ import annotations

import inspect
import math
from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

from .diagnostics import trace_evaluation
from .engine import EngineHandle, OptDir
from .logging import get_logger

if TYPE_CHECKING:
    from .optimizer import Optimizer

logger = get_logger(__name__)

Objective = Callable[..., float]


def apply_positional(fn: Callable[..., float], values: Sequence[float], n: int) -> float:
    """Call ``fn`` with the first ``n`` entries of ``values`` as positional floats."""
    if len(values) < n:
        raise ValueError(f"Need at least {n} values, got {len(values)}")
    return fn(*(float(values[i]) for i in range(n)))


def check_arity(fn: Callable[..., float], n: int) -> None:
    """
    Raise ``TypeError`` unless ``fn`` can be called with ``n`` positional arguments.

    Callables whose signature cannot be inspected (some builtins and C
    extensions) are accepted without a check.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return
    try:
        sig.bind(*([0.0] * n))
    except TypeError as exc:
        name = getattr(fn, "__name__", repr(fn))
        raise TypeError(
            f"Objective {name} cannot take {n} positional parameters: {exc}"
        ) from exc


class Incumbent:
    """Best evaluation seen during one run, for the run's direction."""

    def __init__(self, direction: OptDir) -> None:
        self.direction = direction
        self.x: Optional[np.ndarray] = None
        self.score = math.nan
        self.nfev = 0

    def _improves(self, score: float) -> bool:
        if self.x is None:
            return True
        if self.direction is OptDir.MIN:
            return score < self.score
        return score > self.score

    def offer(self, x: np.ndarray, score: float) -> None:
        self.nfev += 1
        if math.isnan(score):
            return
        if self._improves(score):
            self.x = np.array(x, dtype=float)
            self.score = score


class ObjectiveAdapter:
    """
    Engine callback wrapping a strongly-typed objective.

    Each call polls the owner's stop predicate first and force-stops the
    engine when it fires; the current point is still evaluated. The gradient
    slot is never written.

    An exception raised by the objective (or the predicate) is stored in
    :attr:`error`, the engine is force-stopped and NaN is returned. The owner
    re-raises the stored exception once the engine contexts are released.
    """

    def __init__(
        self,
        objective: Objective,
        owner: Optimizer,
        handle: EngineHandle,
        n: int,
        incumbent: Incumbent,
    ) -> None:
        self._objective = objective
        self._owner = owner
        self._handle = handle
        self._n = n
        self._incumbent = incumbent
        self.error: Optional[BaseException] = None

    def __call__(self, x: np.ndarray, grad: np.ndarray) -> float:
        assert len(x) >= self._n, (
            f"engine passed {len(x)} parameters for a {self._n}-dimensional problem"
        )
        if self.error is not None:
            return math.nan

        try:
            if self._owner.get_criteria().stop_condition():
                logger.debug("Stop condition fired; forcing engine stop")
                self._handle.force_stop()
            score = float(apply_positional(self._objective, x, self._n))
        except Exception as exc:
            self.error = exc
            self._handle.force_stop()
            return math.nan

        params = np.asarray(x, dtype=float)[: self._n]
        self._incumbent.offer(params, score)
        trace_evaluation(self._incumbent.nfev, params.tolist(), score)
        return score


__all__ = [
    "Incumbent",
    "Objective",
    "ObjectiveAdapter",
    "apply_positional",
    "check_arity",
]
