"""Owned wrapper around one NLopt optimizer context.

An :class:`EngineHandle` is created at the start of a single ``optimize`` call
and released when that call ends, whatever the outcome. The engine keeps a
reference to the registered callback for as long as the context lives, so the
handle cannot be copied, pickled or rebound to another context.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional, Sequence

import nlopt
import numpy as np

from .algorithms import Method
from .core import Bound, ResultCode
from .criteria import StopCriteria, is_set
from .logging import get_logger

logger = get_logger(__name__)

EngineCallback = Callable[[np.ndarray, np.ndarray], float]


class OptDir(Enum):
    """Optimization direction."""

    MIN = "min"
    MAX = "max"


def _binding_errors() -> tuple[tuple[type, ResultCode], ...]:
    # Recent bindings raise their own classes (nlopt.invalid_argument,
    # nlopt.runtime_error, ...) derived from nlopt.exception rather than the
    # builtins; older ones raise ValueError / RuntimeError / MemoryError.
    # Most specific first: ForcedStop and RoundoffLimited win over any base.
    candidates = (
        ("ForcedStop", ResultCode.FORCED_STOP),
        ("RoundoffLimited", ResultCode.ROUNDOFF_LIMITED),
        ("bad_alloc", ResultCode.OUT_OF_MEMORY),
        ("invalid_argument", ResultCode.INVALID_ARGS),
        ("runtime_error", ResultCode.FAILURE),
    )
    table = [
        (getattr(nlopt, name), code)
        for name, code in candidates
        if isinstance(getattr(nlopt, name, None), type)
    ]
    table += [
        (MemoryError, ResultCode.OUT_OF_MEMORY),
        (ValueError, ResultCode.INVALID_ARGS),
        (RuntimeError, ResultCode.FAILURE),
    ]
    base = getattr(nlopt, "exception", None)
    if isinstance(base, type) and issubclass(base, BaseException):
        table.append((base, ResultCode.FAILURE))
    return tuple(table)


# The Python binding raises on negative status codes; map them back.
_ENGINE_ERRORS = _binding_errors()
_ENGINE_ERROR_TYPES = tuple(exc_type for exc_type, _ in _ENGINE_ERRORS)


def status_for_exception_type(exc_type: type) -> Optional[ResultCode]:
    """Return the status code a binding exception class stands for, or None."""
    for known, code in _ENGINE_ERRORS:
        if issubclass(exc_type, known):
            return code
    return None


def status_for_exception(exc: BaseException) -> ResultCode:
    """Return the engine status code that a binding exception stands for."""
    code = status_for_exception_type(type(exc))
    return code if code is not None else ResultCode.FAILURE


def seed_engine(value: int) -> None:
    """Seed the engine's process-wide pseudo-random number generator."""
    nlopt.srand(int(value))


class EngineHandle:
    """
    Exclusively owned NLopt context for one algorithm and one dimensionality.

    Use it as a context manager; the context is released on exit, including
    when the body raises::

        with EngineHandle(Method.LN_SBPLX, 2) as handle:
            handle.set_bounds(bnds)
            ...

    After :meth:`close` every engine operation raises ``RuntimeError``.
    """

    __slots__ = ("_method", "_n", "_opt")

    def __init__(self, method: Method, n: int) -> None:
        if n <= 0:
            raise ValueError(f"Engine dimensionality must be positive, got {n}")
        object.__setattr__(self, "_method", method)
        object.__setattr__(self, "_n", int(n))
        object.__setattr__(self, "_opt", nlopt.opt(method.code, int(n)))
        logger.debug("Created engine context %s (n=%d)", method.name, n)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("EngineHandle attributes cannot be reassigned")

    def __copy__(self) -> EngineHandle:
        raise TypeError("EngineHandle cannot be copied")

    def __deepcopy__(self, memo: dict) -> EngineHandle:
        raise TypeError("EngineHandle cannot be copied")

    def __reduce_ex__(self, protocol: int):
        raise TypeError("EngineHandle cannot be pickled")

    def __enter__(self) -> EngineHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"EngineHandle(method={self._method.name}, n={self._n}, {state})"

    @property
    def method(self) -> Method:
        return self._method

    @property
    def dimension(self) -> int:
        return self._n

    @property
    def released(self) -> bool:
        return self._opt is None

    @property
    def opt(self) -> nlopt.opt:
        """The underlying engine object."""
        if self._opt is None:
            raise RuntimeError("Engine context has already been released")
        return self._opt

    def close(self) -> None:
        """Release the engine context. Safe to call more than once."""
        if self._opt is None:
            return
        object.__setattr__(self, "_opt", None)
        logger.debug("Released engine context %s (n=%d)", self._method.name, self._n)

    def set_bounds(self, bnds: Sequence[Bound]) -> None:
        if len(bnds) != self._n:
            raise ValueError(
                f"Expected {self._n} bounds, got {len(bnds)}"
            )
        lower = np.array([b.min() for b in bnds], dtype=float)
        upper = np.array([b.max() for b in bnds], dtype=float)
        self.opt.set_lower_bounds(lower)
        self.opt.set_upper_bounds(upper)

    def set_stop_criteria(self, criteria: StopCriteria) -> None:
        """Apply every criterion that is set; unset ones leave the engine default."""
        opt = self.opt
        if is_set(criteria.abs_score_diff):
            opt.set_ftol_abs(criteria.abs_score_diff)
        if is_set(criteria.rel_score_diff):
            opt.set_ftol_rel(criteria.rel_score_diff)
        if is_set(criteria.stop_score):
            opt.set_stopval(criteria.stop_score)
        if criteria.max_iterations > 0:
            opt.set_maxeval(criteria.max_iterations)

    def set_objective(self, direction: OptDir, callback: EngineCallback) -> None:
        if direction is OptDir.MIN:
            self.opt.set_min_objective(callback)
        elif direction is OptDir.MAX:
            self.opt.set_max_objective(callback)
        else:
            raise ValueError(f"Unknown optimization direction: {direction!r}")

    def set_local_refinement(self, local: EngineHandle) -> None:
        """Install ``local`` as the refinement step of this (global) context."""
        self.opt.set_local_optimizer(local.opt)

    def force_stop(self) -> None:
        self.opt.force_stop()

    def run(self, initial: np.ndarray) -> tuple[int, Optional[np.ndarray], float]:
        """
        Drive the engine from ``initial`` until one of its stop rules fires.

        Returns:
            ``(code, x, score)``. For a negative status the binding does not
            return a vector, so ``x`` is None and ``score`` is NaN; the caller
            falls back to the best point its callback has seen.
        """
        opt = self.opt
        x0 = np.array(initial, dtype=float)
        try:
            x = opt.optimize(x0)
        except _ENGINE_ERROR_TYPES as exc:
            code = status_for_exception(exc)
            logger.debug("Engine %s stopped with %s: %s", self._method.name, code.name, exc)
            return int(code), None, math.nan
        return (
            int(opt.last_optimize_result()),
            np.asarray(x, dtype=float),
            float(opt.last_optimum_value()),
        )


__all__ = ["EngineCallback", "EngineHandle", "OptDir", "seed_engine", "status_for_exception"]
