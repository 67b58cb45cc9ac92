"""Pytest configuration and shared fixtures for hmmrec tests.

This module provides:
- A deterministic numpy RNG fixture
- The two-state reference model used across test modules
- A factory for random, valid models
"""

import os
from typing import Callable

import numpy as np
import pytest

from hmmrec import HiddenMarkovModel


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for every test."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def two_state_model() -> HiddenMarkovModel:
    """States {S0, S1}, symbols {A, B}."""
    return HiddenMarkovModel(
        states=["S0", "S1"],
        symbols=["A", "B"],
        transition=[[0.7, 0.3], [0.4, 0.6]],
        emission=[[0.9, 0.1], [0.2, 0.8]],
        initial=[0.6, 0.4],
    )


@pytest.fixture
def random_model(rng: np.random.Generator) -> Callable[[int, int], HiddenMarkovModel]:
    """Factory for random models with Dirichlet-distributed rows."""

    def make(n_states: int, n_symbols: int) -> HiddenMarkovModel:
        return HiddenMarkovModel(
            states=[f"s{i}" for i in range(n_states)],
            symbols=[f"o{k}" for k in range(n_symbols)],
            transition=rng.dirichlet(np.ones(n_states), size=n_states),
            emission=rng.dirichlet(np.ones(n_symbols), size=n_states),
            initial=rng.dirichlet(np.ones(n_states)),
        )

    return make
