"""Shared fixtures for the cgdescent test suite.

Randomness is seeded from ``TEST_RNG_SEED`` (default 0) so failures can be
reproduced; set the variable to explore other draws.
"""

import os

import numpy as np
import pytest

from cgdescent.diagnostics import set_debug_enabled


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic numpy generator for random problems and start points."""
    return np.random.default_rng(_seed())


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Seed the legacy numpy RNG and restore debug mode after each test."""
    np.random.seed(_seed())
    previous = set_debug_enabled(False)
    yield
    set_debug_enabled(previous)
