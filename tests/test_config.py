"""Tests for optimizer configuration."""

from __future__ import annotations

import math

import numpy as np
import pytest

from boxopt import (
    AlgNLoptGenetic,
    AlgNLoptMLSL,
    AlgNLoptSubplex,
    Method,
    NLoptAlg,
    NLoptAlgComb,
    OptDir,
    Optimizer,
    OptimizerConfig,
    create_optimizer,
    initvals,
)
from boxopt.config import resolve_method


def test_create_subplex_optimizer() -> None:
    """Test creation of a local optimizer with stop criteria."""
    config = OptimizerConfig(method="subplex", abs_score_diff=1e-6, max_iterations=100)
    opt = create_optimizer(config)
    assert isinstance(opt, Optimizer)
    assert opt.method == AlgNLoptSubplex
    assert opt.direction is OptDir.MIN
    assert opt.get_criteria().abs_score_diff == 1e-6
    assert opt.get_criteria().max_iterations == 100
    assert math.isnan(opt.get_criteria().stop_score)


def test_create_optimizer_case_insensitive() -> None:
    """Test that preset and engine names are case-insensitive."""
    assert create_optimizer(OptimizerConfig(method="GeNeTiC")).method == AlgNLoptGenetic
    assert create_optimizer(OptimizerConfig(method="ln_bobyqa")).method == NLoptAlg(
        Method.LN_BOBYQA
    )


def test_create_optimizer_max_direction() -> None:
    """Test that direction is applied."""
    opt = create_optimizer(OptimizerConfig(method="simplex", direction="MAX"))
    assert opt.direction is OptDir.MAX


def test_local_method_builds_combination() -> None:
    """Test that a local_method turns the config into a global+local pair."""
    method = resolve_method(OptimizerConfig(method="GN_DIRECT_L", local_method="LN_SBPLX"))
    assert method == NLoptAlgComb(Method.GN_DIRECT_L, Method.LN_SBPLX)

    # Presets supply the global half.
    method = resolve_method(OptimizerConfig(method="mlsl", local_method="ln_cobyla"))
    assert method == NLoptAlgComb(AlgNLoptMLSL.global_method, Method.LN_COBYLA)


def test_local_method_with_local_global_raises() -> None:
    """Test that pairing two local methods is rejected."""
    with pytest.raises(ValueError, match="not a global algorithm"):
        create_optimizer(OptimizerConfig(method="subplex", local_method="LN_NELDERMEAD"))


def test_create_optimizer_invalid_name_raises() -> None:
    """Test that an unknown method name raises ValueError."""
    with pytest.raises(ValueError, match="Unsupported optimizer method"):
        create_optimizer(OptimizerConfig(method="gradient_descent"))


def test_create_optimizer_invalid_direction_raises() -> None:
    """Test that an unknown direction raises ValueError."""
    with pytest.raises(ValueError, match="Unsupported direction"):
        create_optimizer(OptimizerConfig(method="subplex", direction="sideways"))


def test_create_optimizer_negative_iterations_raises() -> None:
    """Test that a negative evaluation cap raises ValueError."""
    with pytest.raises(ValueError, match="non-negative"):
        create_optimizer(OptimizerConfig(method="subplex", max_iterations=-3))


def test_config_is_frozen() -> None:
    """Test that configs are immutable."""
    config = OptimizerConfig(method="subplex")
    with pytest.raises(AttributeError):
        config.method = "simplex"  # type: ignore[misc]


def test_seeded_config_repeats_stochastic_run(bowl) -> None:
    """Test that config.seed makes stochastic runs reproducible."""
    config = OptimizerConfig(method="GN_CRS2_LM", max_iterations=300, seed=11)
    first = create_optimizer(config).optimize(bowl, initvals([0.0, 0.0]), [(-5, 5), (-5, 5)])
    second = create_optimizer(config).optimize(bowl, initvals([0.0, 0.0]), [(-5, 5), (-5, 5)])
    assert first.score == second.score
    assert np.array_equal(first.optimum, second.optimum)
