"""Value types shared by the optimizer facade and the engine layer.

A problem of dimension ``N`` is described by ``N`` :class:`Bound` objects (a
:data:`Bounds` tuple) and an initial guess of ``N`` floats (an :data:`Input`
array). Positions line up: ``bounds[i]`` constrains ``initvals[i]``, which is
passed as the ``i``-th positional argument of the objective.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

Input = np.ndarray


class ResultCode(IntEnum):
    """Status codes reported by the NLopt engine."""

    FAILURE = -1
    INVALID_ARGS = -2
    OUT_OF_MEMORY = -3
    ROUNDOFF_LIMITED = -4
    FORCED_STOP = -5
    SUCCESS = 1
    STOPVAL_REACHED = 2
    FTOL_REACHED = 3
    XTOL_REACHED = 4
    MAXEVAL_REACHED = 5
    MAXTIME_REACHED = 6


@dataclass(frozen=True)
class Bound:
    """
    Closed interval of admissible values for one parameter.

    The default is the widest interval, ``(-inf, inf)``, which the engine reads
    as an unconstrained dimension. ``lower <= upper`` is not checked here: an
    inverted bound reaches the engine as given and is reported back through
    the run's result code.
    """

    lower: float = -math.inf
    upper: float = math.inf

    def min(self) -> float:
        return float(self.lower)

    def max(self) -> float:
        return float(self.upper)

    def is_inverted(self) -> bool:
        return self.lower > self.upper


Bounds = Tuple[Bound, ...]
BoundLike = Union[Bound, Tuple[float, float]]


def bounds(items: Iterable[BoundLike]) -> Bounds:
    """Build a :data:`Bounds` tuple from ``Bound`` objects or ``(min, max)`` pairs."""
    out = []
    for item in items:
        if isinstance(item, Bound):
            out.append(item)
        else:
            lo, hi = item
            out.append(Bound(float(lo), float(hi)))
    return tuple(out)


def initvals(values: Sequence[float]) -> Input:
    """Build an :data:`Input` vector from a literal sequence of numbers."""
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"initvals expects a flat sequence, got shape {arr.shape}")
    return arr


@dataclass
class Result:
    """
    Outcome of one ``optimize`` call.

    Attributes:
        resultcode: Raw engine status code, passed through unchanged.
        optimum: Best parameter vector found.
        score: Objective value at ``optimum``.
        nfev: Number of objective evaluations performed during the run.
    """

    resultcode: int
    optimum: Input
    score: float
    nfev: int = 0

    @property
    def status(self) -> Optional[ResultCode]:
        """The :class:`ResultCode` for ``resultcode``, or None if it is unknown."""
        try:
            return ResultCode(self.resultcode)
        except ValueError:
            return None

    @property
    def success(self) -> bool:
        return self.resultcode > 0


__all__ = [
    "Bound",
    "BoundLike",
    "Bounds",
    "Input",
    "Result",
    "ResultCode",
    "bounds",
    "initvals",
]
