"""
Example: bounded black-box optimization with boxopt

Fits the two parameters of a damped oscillation to noisy samples, first with a
local method from a rough guess, then with a global search refined locally,
and finally shows how a stop predicate cuts a run short.
"""

import time

import numpy as np

from boxopt import (
    AlgNLoptMLSL,
    DefaultLocalOptimizer,
    Optimizer,
    OptimizerConfig,
    StopCriteria,
    bounds,
    create_optimizer,
    initvals,
)

rng = np.random.default_rng(0)
t = np.linspace(0.0, 10.0, 200)
TRUE_DAMPING, TRUE_FREQ = 0.3, 1.7
samples = np.exp(-TRUE_DAMPING * t) * np.cos(TRUE_FREQ * t) + rng.normal(0.0, 0.02, t.size)


def misfit(damping: float, freq: float) -> float:
    model = np.exp(-damping * t) * np.cos(freq * t)
    return float(np.mean((model - samples) ** 2))


BOX = bounds([(0.0, 2.0), (0.1, 5.0)])


def example_local_fit():
    print("=" * 60)
    print("Example 1: Local refinement (Subplex)")
    print("=" * 60)
    opt = DefaultLocalOptimizer(StopCriteria(abs_score_diff=1e-10)).to_min()
    res = opt.optimize(misfit, initvals([0.2, 1.5]), BOX)
    print(f"Status: {res.status.name if res.status else res.resultcode}")
    print(f"damping = {res.optimum[0]:.4f}, freq = {res.optimum[1]:.4f}")
    print(f"misfit = {res.score:.3e} after {res.nfev} evaluations")
    print()


def example_global_fit():
    print("=" * 60)
    print("Example 2: Global search with local refinement (MLSL + Subplex)")
    print("=" * 60)
    opt = Optimizer(AlgNLoptMLSL, StopCriteria(abs_score_diff=1e-10, max_iterations=4000))
    opt.to_min().seed(1)
    res = opt.optimize(misfit, initvals([1.0, 4.0]), BOX)
    print(f"damping = {res.optimum[0]:.4f}, freq = {res.optimum[1]:.4f}")
    print(f"misfit = {res.score:.3e} after {res.nfev} evaluations")
    print()


def example_deadline():
    print("=" * 60)
    print("Example 3: Stopping on a wall-clock deadline")
    print("=" * 60)
    deadline = time.monotonic() + 0.05
    opt = create_optimizer(OptimizerConfig(method="isres", seed=3))
    opt.get_criteria().set_stop_condition(lambda: time.monotonic() > deadline)
    res = opt.optimize(misfit, initvals([1.0, 1.0]), BOX)
    print(f"Status: {res.status.name if res.status else res.resultcode}")
    print(f"best so far: damping = {res.optimum[0]:.4f}, freq = {res.optimum[1]:.4f}")
    print(f"misfit = {res.score:.3e} after {res.nfev} evaluations")
    print()


if __name__ == "__main__":
    example_local_fit()
    example_global_fit()
    example_deadline()
    print("Done.")
