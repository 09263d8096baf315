"""Factory for creating optimizers from configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from .algorithms import (
    AlgNLoptBOBYQA,
    AlgNLoptCOBYLA,
    AlgNLoptCRS2,
    AlgNLoptDIRECT,
    AlgNLoptGenetic,
    AlgNLoptISRES,
    AlgNLoptMLSL,
    AlgNLoptORIG_DIRECT,
    AlgNLoptSimplex,
    AlgNLoptSubplex,
    Method,
    NLoptAlg,
    NLoptAlgComb,
)
from .criteria import StopCriteria
from .optimizer import Optimizer

_PRESETS: dict[str, Union[NLoptAlg, NLoptAlgComb]] = {
    "genetic": AlgNLoptGenetic,
    "subplex": AlgNLoptSubplex,
    "simplex": AlgNLoptSimplex,
    "direct": AlgNLoptDIRECT,
    "orig_direct": AlgNLoptORIG_DIRECT,
    "isres": AlgNLoptISRES,
    "crs2": AlgNLoptCRS2,
    "mlsl": AlgNLoptMLSL,
    "bobyqa": AlgNLoptBOBYQA,
    "cobyla": AlgNLoptCOBYLA,
}


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Configuration for creating an :class:`~boxopt.optimizer.Optimizer`.

    Args:
        method: Preset name ("genetic", "subplex", "simplex", "direct",
            "orig_direct", "isres", "crs2", "mlsl", "bobyqa", "cobyla") or an
            engine algorithm name such as "GN_ESCH". Case-insensitive.
        local_method: Engine name of a local (LN_*) refinement algorithm. When
            given, ``method`` must name a global algorithm and the two are
            combined.
        direction: "min" or "max".
        abs_score_diff: Absolute score tolerance. NaN leaves it unset.
        rel_score_diff: Relative score tolerance. NaN leaves it unset.
        stop_score: Score at which to stop. NaN leaves it unset.
        max_iterations: Evaluation cap. 0 leaves it unset.
        seed: Seed for the engine PRNG, applied when the optimizer is created.
    """

    method: str
    local_method: Optional[str] = None
    direction: str = "min"
    abs_score_diff: float = math.nan
    rel_score_diff: float = math.nan
    stop_score: float = math.nan
    max_iterations: int = 0
    seed: Optional[int] = None


def _lookup_method(name: str) -> Method:
    try:
        return Method[name.upper()]
    except KeyError:
        supported = sorted(_PRESETS) + [m.name for m in Method]
        raise ValueError(
            f"Unsupported optimizer method '{name}'. Supported names: {supported}"
        ) from None


def resolve_method(config: OptimizerConfig) -> Union[NLoptAlg, NLoptAlgComb]:
    """Turn the names in ``config`` into an algorithm identity."""
    name_lower = config.method.lower()

    if config.local_method is not None:
        glob = _PRESETS.get(name_lower)
        if isinstance(glob, NLoptAlgComb):
            global_method = glob.global_method
        elif isinstance(glob, NLoptAlg):
            global_method = glob.method
        else:
            global_method = _lookup_method(config.method)
        return NLoptAlgComb(global_method, _lookup_method(config.local_method))

    if name_lower in _PRESETS:
        return _PRESETS[name_lower]
    return NLoptAlg(_lookup_method(config.method))


def create_optimizer(config: OptimizerConfig) -> Optimizer:
    """
    Create an optimizer from a configuration.

    Args:
        config: Optimizer configuration.

    Returns:
        An :class:`~boxopt.optimizer.Optimizer` with direction and stop
        criteria applied and, if ``config.seed`` is set, the engine seeded.

    Raises:
        ValueError: If a method name or the direction is not supported, or if
            ``max_iterations`` is negative.
    """
    direction = config.direction.lower()
    if direction not in ("min", "max"):
        raise ValueError(
            f"Unsupported direction '{config.direction}'. Supported: ['max', 'min']"
        )

    criteria = StopCriteria(
        abs_score_diff=config.abs_score_diff,
        rel_score_diff=config.rel_score_diff,
        stop_score=config.stop_score,
        max_iterations=config.max_iterations,
    )
    optimizer = Optimizer(resolve_method(config), criteria, direction=direction)
    if config.seed is not None:
        optimizer.seed(config.seed)
    return optimizer


__all__ = ["OptimizerConfig", "create_optimizer", "resolve_method"]
