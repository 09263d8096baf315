"""Pytest configuration and shared fixtures for boxopt tests.

This module provides:
- An autouse fixture seeding the engine PRNG so stochastic algorithms repeat
- A quadratic bowl objective shared by the facade tests
"""

import os

import pytest

from boxopt.engine import seed_engine


def _test_seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the engine before every test.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed_engine(_test_seed())


@pytest.fixture
def bowl():
    """Quadratic bowl with its minimum (score 0) at (1, -2)."""

    def fun(x0: float, x1: float) -> float:
        return (x0 - 1.0) ** 2 + (x1 + 2.0) ** 2

    return fun
