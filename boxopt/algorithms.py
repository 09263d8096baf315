"""Algorithm identities accepted by :class:`boxopt.optimizer.Optimizer`.

An identity is either a single engine algorithm (:class:`NLoptAlg`) or a
global algorithm paired with a local refinement algorithm
(:class:`NLoptAlgComb`). The optimizer picks its run strategy from the
identity's type, so only these two types are accepted.

Only derivative-free algorithms are listed in :class:`Method`: objectives are
black boxes that return a score and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import nlopt


class Method(Enum):
    """Derivative-free NLopt algorithms supported by boxopt."""

    # Global
    GN_DIRECT = "GN_DIRECT"
    GN_DIRECT_L = "GN_DIRECT_L"
    GN_DIRECT_L_RAND = "GN_DIRECT_L_RAND"
    GN_ORIG_DIRECT = "GN_ORIG_DIRECT"
    GN_ORIG_DIRECT_L = "GN_ORIG_DIRECT_L"
    GN_CRS2_LM = "GN_CRS2_LM"
    GN_ISRES = "GN_ISRES"
    GN_ESCH = "GN_ESCH"
    GN_MLSL = "GN_MLSL"
    GN_MLSL_LDS = "GN_MLSL_LDS"
    # Local
    LN_NELDERMEAD = "LN_NELDERMEAD"
    LN_SBPLX = "LN_SBPLX"
    LN_BOBYQA = "LN_BOBYQA"
    LN_COBYLA = "LN_COBYLA"
    LN_PRAXIS = "LN_PRAXIS"
    LN_NEWUOA_BOUND = "LN_NEWUOA_BOUND"

    @property
    def code(self) -> int:
        """The engine's numeric constant for this algorithm."""
        return getattr(nlopt, self.value)

    @property
    def is_global(self) -> bool:
        return self.value.startswith("GN_")

    @property
    def is_local(self) -> bool:
        return self.value.startswith("LN_")


@dataclass(frozen=True)
class NLoptAlg:
    """A single NLopt algorithm."""

    method: Method

    def __post_init__(self) -> None:
        if not isinstance(self.method, Method):
            raise TypeError(f"NLoptAlg expects a Method, got {self.method!r}")


@dataclass(frozen=True)
class NLoptAlgComb:
    """
    A global NLopt algorithm refined by a local one.

    The engine runs ``global_method`` and uses ``local_method`` for its local
    searches. Algorithms that do no local searches of their own (e.g.
    ``GN_ESCH``) simply ignore the local step.
    """

    global_method: Method
    local_method: Method = Method.LN_NELDERMEAD

    def __post_init__(self) -> None:
        for m in (self.global_method, self.local_method):
            if not isinstance(m, Method):
                raise TypeError(f"NLoptAlgComb expects Method members, got {m!r}")
        if not self.global_method.is_global:
            raise ValueError(
                f"{self.global_method.name} is not a global algorithm; "
                "the first member of a combination must be GN_*"
            )
        if not self.local_method.is_local:
            raise ValueError(
                f"{self.local_method.name} is not a local algorithm; "
                "the refinement step must be LN_*"
            )


# Identities used throughout the codebase
AlgNLoptGenetic = NLoptAlgComb(Method.GN_ESCH)
AlgNLoptSubplex = NLoptAlg(Method.LN_SBPLX)
AlgNLoptSimplex = NLoptAlg(Method.LN_NELDERMEAD)
AlgNLoptDIRECT = NLoptAlg(Method.GN_DIRECT)
AlgNLoptORIG_DIRECT = NLoptAlg(Method.GN_ORIG_DIRECT)
AlgNLoptISRES = NLoptAlg(Method.GN_ISRES)
AlgNLoptCRS2 = NLoptAlg(Method.GN_CRS2_LM)
AlgNLoptMLSL = NLoptAlgComb(Method.GN_MLSL_LDS, Method.LN_SBPLX)
AlgNLoptBOBYQA = NLoptAlg(Method.LN_BOBYQA)
AlgNLoptCOBYLA = NLoptAlg(Method.LN_COBYLA)


__all__ = [
    "AlgNLoptBOBYQA",
    "AlgNLoptCOBYLA",
    "AlgNLoptCRS2",
    "AlgNLoptDIRECT",
    "AlgNLoptGenetic",
    "AlgNLoptISRES",
    "AlgNLoptMLSL",
    "AlgNLoptORIG_DIRECT",
    "AlgNLoptSimplex",
    "AlgNLoptSubplex",
    "Method",
    "NLoptAlg",
    "NLoptAlgComb",
]
