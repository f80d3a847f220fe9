"""Tests for debug mode functionality."""

import numpy as np
import pytest

import rltiles.tilecoding.core as tile_core
from rltiles.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from rltiles.diagnostics.debug_mode import _flag_from_env
from rltiles.tilecoding import TileCoder


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    set_debug_enabled(False)
    assert not is_debug_enabled()

    with debug_context(True):
        assert is_debug_enabled()

    # Back to previous (False in this block)
    assert not is_debug_enabled()

    set_debug_enabled(True)
    with debug_context(False):
        assert not is_debug_enabled()
    assert is_debug_enabled()


def test_debug_context_restores_after_error() -> None:
    """Test that the previous flag is restored when the block raises."""
    set_debug_enabled(False)

    with pytest.raises(RuntimeError):
        with debug_context(True):
            raise RuntimeError("boom")

    assert not is_debug_enabled()


def test_encode_in_debug_mode_matches_normal_mode() -> None:
    """Test that debug checks do not change the encoding."""
    coder = TileCoder([-1.0, 0.0], [1.0, 2.0], [[3, 4], [5, 2]], seed=3, include_bias=True)
    v = np.array([0.2, 1.7])

    with debug_context(False):
        plain = coder.encode(v)
    with debug_context(True):
        checked = coder.encode(v)
        clamped = coder.encode([-10.0, 10.0])

    np.testing.assert_array_equal(plain, checked)
    assert clamped.sum() == coder.num_active


def test_encode_batch_in_debug_mode_clamps_each_sample() -> None:
    """Test that batch encoding in debug mode still yields one tile per column."""
    coder = TileCoder([0.0], [1.0], [[4]])
    batch = np.array([[0.5, 2.0, -3.0]])

    with debug_context(True):
        result = coder.encode_batch(batch)

    assert result.shape == (4, 3)
    np.testing.assert_array_equal(result.sum(axis=0), np.ones(3))


def test_encode_batch_checks_every_column_in_debug_mode(monkeypatch) -> None:
    """Test that each sample of a batch is verified while debug mode is on."""
    checked = []

    def record(vector, num_active, atol=0.0):
        checked.append((vector.copy(), num_active))

    monkeypatch.setattr(tile_core, "assert_tile_coded", record)
    coder = TileCoder([0.0, 0.0], [1.0, 1.0], [[3, 3], [2, 2]], seed=1, include_bias=True)
    batch = np.array([[0.1, 0.5, 4.0], [0.9, -2.0, 0.5]])

    with debug_context(False):
        coder.encode_batch(batch)
    assert checked == []

    with debug_context(True):
        result = coder.encode_batch(batch)
    assert len(checked) == batch.shape[1]
    for i, (vector, num_active) in enumerate(checked):
        assert num_active == coder.num_active
        np.testing.assert_array_equal(vector, result[:, i])


def test_debug_check_rejects_miscoded_batch(monkeypatch) -> None:
    """Test that a batch with a missing active feature raises in debug mode."""
    coder = TileCoder([0.0], [1.0], [[2], [2]], offsets=[[0.0], [0.0]])
    # Both tilings now write into the same feature block, so their tiles collide.
    monkeypatch.setattr(coder, "_base", np.zeros_like(coder.tiling_bases))

    batch = np.array([[0.25, 0.75]])
    with debug_context(False):
        assert coder.encode_batch(batch).sum(axis=0).tolist() == [1.0, 1.0]
    with debug_context(True):
        with pytest.raises(ValueError, match="expected 2 active features, found 1"):
            coder.encode_batch(batch)


def test_debug_flag_parsing_from_environment() -> None:
    """Test the accepted spellings of RLTILES_DEBUG."""
    for value in ("1", "true", "TRUE", "yes", "On", " on "):
        assert _flag_from_env(value)
    for value in (None, "", "0", "false", "off", "debug"):
        assert not _flag_from_env(value)
