"""Pytest configuration and shared fixtures for rltiles tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A fixture restoring the global debug flag after each test
"""

import os

import numpy as np
import pytest
import torch

from rltiles.diagnostics import is_debug_enabled, set_debug_enabled


def _test_seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_test_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests.

    Returns:
        A seeded torch.Generator instance.
    """
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_test_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_test_seed())
    torch.manual_seed(_test_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Leave the global debug flag as each test found it."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)
