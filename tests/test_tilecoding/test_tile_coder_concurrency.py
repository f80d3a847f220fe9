"""Tests for per-tiling fan-out and sharing a coder between threads."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from rltiles.tilecoding import TileCoder


@pytest.fixture
def coder():
    return TileCoder(
        [-1.2, -0.07],
        [0.6, 0.07],
        [[5, 5]] * 5 + [[3, 3]] * 5,
        seed=11,
        include_bias=True,
    )


def test_executor_matches_serial(coder, rng):
    """Test that fanning tilings out to an executor gives the serial result."""
    with ThreadPoolExecutor(max_workers=4) as executor:
        for _ in range(50):
            v = rng.uniform([-1.5, -0.1], [0.9, 0.1])
            np.testing.assert_array_equal(
                coder.encode_indices(v, executor=executor),
                coder.encode_indices(v),
            )
            np.testing.assert_array_equal(
                coder.encode(v, executor=executor),
                coder.encode(v),
            )


def test_single_worker_executor(coder):
    """Test that a single worker still assembles results in tiling order."""
    with ThreadPoolExecutor(max_workers=1) as executor:
        indices = coder.encode_indices([0.0, 0.0], executor=executor)
    assert indices[0] == 0
    assert np.all(np.diff(indices) > 0)
    assert indices.shape == (coder.num_active,)


def test_concurrent_calls_share_one_executor(coder, rng):
    """Test that overlapping calls through one executor never mix results."""
    samples = rng.uniform([-1.2, -0.07], [0.6, 0.07], size=(64, 2))
    expected = [coder.encode_indices(v) for v in samples]

    with ThreadPoolExecutor(max_workers=8) as inner, ThreadPoolExecutor(max_workers=8) as outer:
        results = list(outer.map(lambda v: coder.encode_indices(v, executor=inner), samples))

    for got, want in zip(results, expected):
        np.testing.assert_array_equal(got, want)


def test_encode_from_many_threads(coder, rng):
    """Test that one coder can be used from many threads without locking."""
    samples = rng.uniform([-1.2, -0.07], [0.6, 0.07], size=(200, 2))
    expected = np.stack([coder.encode(v) for v in samples])

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = np.stack(list(pool.map(coder.encode, samples)))

    np.testing.assert_array_equal(results, expected)


def test_executor_rejects_bad_input_before_submitting(coder):
    """Test that validation errors surface before any work is scheduled."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        with pytest.raises(ValueError, match="NaN"):
            coder.encode([np.nan, 0.0], executor=executor)
