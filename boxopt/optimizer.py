"""Optimizer facade over the NLopt engine.

Example
-------
>>> from boxopt import Optimizer, AlgNLoptSubplex, StopCriteria, bounds, initvals
>>> opt = Optimizer(AlgNLoptSubplex, StopCriteria(abs_score_diff=1e-8)).to_min()
>>> res = opt.optimize(
...     lambda a, b: (a - 1) ** 2 + (b + 2) ** 2,
...     initvals([0.0, 0.0]),
...     bounds([(-10, 10), (-10, 10)]),
... )
>>> res.optimum.round(3).tolist()
[1.0, -2.0]
"""

from __future__ import annotations

import functools
import math
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .adapter import Incumbent, Objective, ObjectiveAdapter, check_arity
from .algorithms import AlgNLoptGenetic, AlgNLoptSubplex, NLoptAlg, NLoptAlgComb
from .core import Bound, BoundLike, Bounds, Result, ResultCode, bounds as make_bounds
from .criteria import StopCriteria
from .engine import EngineHandle, OptDir, seed_engine
from .logging import get_logger

logger = get_logger(__name__)

RunOutcome = tuple[int, Optional[np.ndarray], float]


class _Session:
    """Everything one ``optimize`` call hands to the engine handles it creates."""

    def __init__(
        self,
        owner: Optimizer,
        objective: Objective,
        initial: np.ndarray,
        bnds: Bounds,
        direction: OptDir,
    ) -> None:
        self.owner = owner
        self.objective = objective
        self.initial = initial
        self.bounds = bnds
        self.n = len(bnds)
        self.direction = direction
        self.incumbent = Incumbent(direction)
        self.adapters: list[ObjectiveAdapter] = []

    def set_up(self, handle: EngineHandle) -> None:
        handle.set_bounds(self.bounds)
        handle.set_stop_criteria(self.owner.get_criteria())
        adapter = ObjectiveAdapter(self.objective, self.owner, handle, self.n, self.incumbent)
        handle.set_objective(self.direction, adapter)
        self.adapters.append(adapter)

    def objective_error(self) -> Optional[BaseException]:
        for adapter in self.adapters:
            if adapter.error is not None:
                return adapter.error
        return None


@functools.singledispatch
def _run_method(method: object, session: _Session) -> RunOutcome:
    raise TypeError(f"Optimizer unimplemented for given method: {method!r}")


@_run_method.register(NLoptAlg)
def _run_single(method: NLoptAlg, session: _Session) -> RunOutcome:
    with EngineHandle(method.method, session.n) as nl:
        session.set_up(nl)
        return nl.run(session.initial)


@_run_method.register(NLoptAlgComb)
def _run_combined(method: NLoptAlgComb, session: _Session) -> RunOutcome:
    with EngineHandle(method.global_method, session.n) as nl_glob, EngineHandle(
        method.local_method, session.n
    ) as nl_loc:
        session.set_up(nl_glob)
        session.set_up(nl_loc)
        nl_glob.set_local_refinement(nl_loc)
        # Only the global context is driven; the engine consults the local one.
        return nl_glob.run(session.initial)


def is_supported(method: object) -> bool:
    """Return True if :class:`Optimizer` has a run strategy for ``method``."""
    return _run_method.dispatch(type(method)) is not _run_method.dispatch(object)


class Optimizer:
    """
    Bounded, derivative-free optimizer for a fixed algorithm identity.

    Args:
        method: An :class:`~boxopt.algorithms.NLoptAlg` or
            :class:`~boxopt.algorithms.NLoptAlgComb` identity.
        criteria: Stop criteria. A copy is stored; defaults to no limits.
        direction: ``"min"``, ``"max"`` or an :class:`~boxopt.engine.OptDir`.
            Can also be set later with :meth:`to_min` / :meth:`to_max`, and
            must be set before :meth:`optimize`.

    Raises:
        TypeError: If there is no run strategy for ``method``.
    """

    def __init__(
        self,
        method: Union[NLoptAlg, NLoptAlgComb],
        criteria: Optional[StopCriteria] = None,
        direction: Union[OptDir, str, None] = None,
    ) -> None:
        if not is_supported(method):
            raise TypeError(f"Optimizer unimplemented for given method: {method!r}")
        self._method = method
        self._criteria = criteria.copy() if criteria is not None else StopCriteria()
        self._dir: Optional[OptDir] = OptDir(direction) if direction is not None else None
        self._running = False

    def __repr__(self) -> str:
        direction = self._dir.value if self._dir is not None else None
        return f"Optimizer(method={self._method!r}, direction={direction!r})"

    @property
    def method(self) -> Union[NLoptAlg, NLoptAlgComb]:
        return self._method

    @property
    def direction(self) -> Optional[OptDir]:
        return self._dir

    def _ensure_idle(self, action: str) -> None:
        if self._running:
            raise RuntimeError(f"Cannot {action} while an optimization is running")

    def to_min(self) -> Optimizer:
        self._ensure_idle("change direction")
        self._dir = OptDir.MIN
        return self

    def to_max(self) -> Optimizer:
        self._ensure_idle("change direction")
        self._dir = OptDir.MAX
        return self

    def set_criteria(self, criteria: StopCriteria) -> Optimizer:
        self._ensure_idle("replace stop criteria")
        self._criteria = criteria.copy()
        return self

    def get_criteria(self) -> StopCriteria:
        return self._criteria

    def seed(self, value: int) -> None:
        """Seed the engine's process-wide PRNG (no effect on deterministic methods)."""
        seed_engine(value)

    def optimize(
        self,
        objective: Objective,
        initvals: Sequence[float],
        bounds: Iterable[Union[Bound, BoundLike]],
    ) -> Result:
        """
        Search for the best point of ``objective`` inside ``bounds``.

        Args:
            objective: Function of ``N`` positional floats returning a score.
            initvals: Initial guess of length ``N``.
            bounds: ``N`` bounds (``Bound`` objects or ``(min, max)`` pairs).

        Returns:
            The run's :class:`~boxopt.core.Result`. Engine status codes,
            including negative ones, are returned rather than raised.

        Raises:
            RuntimeError: If no direction was set, or on re-entrant use.
            ValueError: If ``initvals`` and ``bounds`` disagree on ``N``.
            TypeError: If ``objective`` cannot take ``N`` positional arguments.
            Exception: Whatever ``objective`` raised, after the engine
                contexts have been released.
        """
        if self._dir is None:
            raise RuntimeError(
                "Optimization direction is not set; call to_min() or to_max() first"
            )
        self._ensure_idle("start another optimization")

        bnds = make_bounds(bounds)
        n = len(bnds)
        if n == 0:
            raise ValueError("Cannot optimize over zero parameters")
        x0 = np.array(initvals, dtype=float)
        if x0.shape != (n,):
            raise ValueError(
                f"Initial guess has shape {x0.shape} but {n} bounds were given"
            )
        check_arity(objective, n)
        for i, b in enumerate(bnds):
            if b.is_inverted():
                logger.warning(
                    "Bound %d is inverted (min=%g > max=%g); passing it to the engine as is",
                    i,
                    b.min(),
                    b.max(),
                )

        session = _Session(self, objective, x0, bnds, self._dir)
        self._running = True
        try:
            code, x, score = _run_method(self._method, session)
        finally:
            self._running = False

        error = session.objective_error()
        if error is not None:
            raise error

        incumbent = session.incumbent
        if x is None:
            if incumbent.x is not None:
                x, score = incumbent.x, incumbent.score
            else:
                x, score = x0.copy(), math.nan

        result = Result(
            resultcode=code,
            optimum=np.asarray(x, dtype=float)[:n],
            score=float(score),
            nfev=incumbent.nfev,
        )
        self._log_outcome(result)
        return result

    def _log_outcome(self, result: Result) -> None:
        status = result.status
        name = status.name if status is not None else str(result.resultcode)
        if result.resultcode < 0 and status is not ResultCode.FORCED_STOP:
            logger.warning(
                "Optimization with %r ended with status %s after %d evaluations",
                self._method,
                name,
                result.nfev,
            )
        else:
            logger.info(
                "Optimization finished with status %s: score=%.10g after %d evaluations",
                name,
                result.score,
                result.nfev,
            )


def DefaultGlobalOptimizer(criteria: Optional[StopCriteria] = None) -> Optimizer:
    """Global search tuned for broad exploration (evolutionary strategy)."""
    return Optimizer(AlgNLoptGenetic, criteria)


def DefaultLocalOptimizer(criteria: Optional[StopCriteria] = None) -> Optimizer:
    """Local search suited for polishing a good starting point (Subplex)."""
    return Optimizer(AlgNLoptSubplex, criteria)


__all__ = [
    "DefaultGlobalOptimizer",
    "DefaultLocalOptimizer",
    "Optimizer",
    "is_supported",
]
