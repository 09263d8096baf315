"""boxopt - bounded, derivative-free optimization over the NLopt engine."""

__version__ = "0.1.0"

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
from .config import OptimizerConfig, create_optimizer
from .core import Bound, Bounds, Input, Result, ResultCode, bounds, initvals
from .criteria import StopCriteria
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled
from .engine import EngineHandle, OptDir
from .logging import configure_logging, get_logger, set_log_level
from .optimizer import DefaultGlobalOptimizer, DefaultLocalOptimizer, Optimizer

__all__ = [
    "__version__",
    # Value types
    "Bound",
    "Bounds",
    "Input",
    "Result",
    "ResultCode",
    "bounds",
    "initvals",
    "StopCriteria",
    # Algorithms
    "Method",
    "NLoptAlg",
    "NLoptAlgComb",
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
    # Optimizer
    "EngineHandle",
    "OptDir",
    "Optimizer",
    "DefaultGlobalOptimizer",
    "DefaultLocalOptimizer",
    "OptimizerConfig",
    "create_optimizer",
    # Logging & diagnostics
    "configure_logging",
    "get_logger",
    "set_log_level",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
]
