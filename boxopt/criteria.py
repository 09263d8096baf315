"""Stop criteria for optimization runs."""

from __future__ import annotations

import math
from typing import Callable, Optional

StopPredicate = Callable[[], bool]


def _never() -> bool:
    return False


class StopCriteria:
    """
    Termination conditions for one optimization run.

    Every field is optional. The three float tolerances use NaN for "unset"
    and ``max_iterations`` uses 0. The stop predicate defaults to a function
    that always returns False. Setters return the instance so calls chain::

        cr = StopCriteria().set_abs_score_diff(1e-6).set_max_iterations(500)

    Args:
        abs_score_diff: Stop when two successive scores differ by less than
            this absolute amount.
        rel_score_diff: Same as ``abs_score_diff`` but relative to the score.
        stop_score: Stop as soon as a score this good or better is found.
        max_iterations: Maximum number of objective evaluations.
        stop_condition: Zero-argument predicate polled before every
            evaluation; when it returns True the run ends with the best point
            found so far.
    """

    def __init__(
        self,
        abs_score_diff: float = math.nan,
        rel_score_diff: float = math.nan,
        stop_score: float = math.nan,
        max_iterations: int = 0,
        stop_condition: Optional[StopPredicate] = None,
    ) -> None:
        self._abs_score_diff = math.nan
        self._rel_score_diff = math.nan
        self._stop_score = math.nan
        self._max_iterations = 0
        self._stop_condition: StopPredicate = _never

        self.set_abs_score_diff(abs_score_diff)
        self.set_rel_score_diff(rel_score_diff)
        self.set_stop_score(stop_score)
        self.set_max_iterations(max_iterations)
        if stop_condition is not None:
            self.set_stop_condition(stop_condition)

    def set_abs_score_diff(self, val: float) -> StopCriteria:
        self._abs_score_diff = float(val)
        return self

    @property
    def abs_score_diff(self) -> float:
        return self._abs_score_diff

    def set_rel_score_diff(self, val: float) -> StopCriteria:
        self._rel_score_diff = float(val)
        return self

    @property
    def rel_score_diff(self) -> float:
        return self._rel_score_diff

    def set_stop_score(self, val: float) -> StopCriteria:
        self._stop_score = float(val)
        return self

    @property
    def stop_score(self) -> float:
        return self._stop_score

    def set_max_iterations(self, val: int) -> StopCriteria:
        if val < 0:
            raise ValueError(f"max_iterations must be non-negative, got {val}")
        self._max_iterations = int(val)
        return self

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def set_stop_condition(self, cond: StopPredicate) -> StopCriteria:
        if not callable(cond):
            raise TypeError("stop_condition must be a zero-argument callable")
        self._stop_condition = cond
        return self

    def stop_condition(self) -> bool:
        """Evaluate the stored stop predicate."""
        return bool(self._stop_condition())

    def copy(self) -> StopCriteria:
        """Return an independent copy sharing the same predicate object."""
        return StopCriteria(
            abs_score_diff=self._abs_score_diff,
            rel_score_diff=self._rel_score_diff,
            stop_score=self._stop_score,
            max_iterations=self._max_iterations,
            stop_condition=self._stop_condition,
        )

    def __repr__(self) -> str:
        return (
            f"StopCriteria(abs_score_diff={self._abs_score_diff}, "
            f"rel_score_diff={self._rel_score_diff}, "
            f"stop_score={self._stop_score}, "
            f"max_iterations={self._max_iterations})"
        )


def is_set(value: float) -> bool:
    """Return True if a float criterion holds a value rather than the NaN sentinel."""
    return not math.isnan(value)


__all__ = ["StopCriteria", "StopPredicate", "is_set"]
