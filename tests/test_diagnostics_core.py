"""Tests for core diagnostic functions."""

import numpy as np
import pytest

from rltiles.diagnostics import (
    assert_tile_coded,
    is_binary,
    out_of_bounds_dims,
)


def test_is_binary() -> None:
    """Test is_binary on binary and non-binary arrays."""
    assert is_binary(np.array([0.0, 1.0, 1.0, 0.0]))
    assert is_binary(np.zeros((3, 2)))
    assert not is_binary(np.array([0.0, 0.5]))
    assert not is_binary(np.array([2.0]))


def test_is_binary_with_tolerance() -> None:
    """Test that atol admits values close to 0 or 1."""
    vector = np.array([1e-9, 1.0 - 1e-9])
    assert not is_binary(vector)
    assert is_binary(vector, atol=1e-6)


def test_assert_tile_coded_accepts_valid_vector() -> None:
    """Test that a binary vector with the right active count passes."""
    # Should not raise
    assert_tile_coded(np.array([1.0, 0.0, 0.0, 1.0, 1.0]), num_active=3)


def test_assert_tile_coded_rejects_non_binary() -> None:
    """Test that non-binary entries are rejected."""
    with pytest.raises(ValueError, match="not a tile-coded vector"):
        assert_tile_coded(np.array([1.0, 0.3]), num_active=1)


def test_assert_tile_coded_rejects_wrong_count() -> None:
    """Test that the number of ones must match num_active."""
    with pytest.raises(ValueError, match="expected 2 active features, found 1"):
        assert_tile_coded(np.array([1.0, 0.0, 0.0]), num_active=2)


def test_assert_tile_coded_rejects_matrix() -> None:
    """Test that only 1D vectors are accepted."""
    with pytest.raises(ValueError, match="must be 1D"):
        assert_tile_coded(np.eye(2), num_active=2)


def test_out_of_bounds_dims() -> None:
    """Test that offending dimensions are reported in order."""
    low = np.array([0.0, -1.0, 0.0])
    high = np.array([1.0, 1.0, 1.0])

    np.testing.assert_array_equal(out_of_bounds_dims([0.5, 0.0, 1.0], low, high), [])
    np.testing.assert_array_equal(out_of_bounds_dims([1.5, -2.0, 0.5], low, high), [0, 1])
    np.testing.assert_array_equal(out_of_bounds_dims([0.5, 0.0, np.inf], low, high), [2])
