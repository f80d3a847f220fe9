"""Smoke tests for the tile-coding benchmarks."""

from benchmarks.bench_tile_coder import benchmark_encode, benchmark_encode_batch


def test_benchmark_encode_reports_timings() -> None:
    """Test that a small encode benchmark returns its timing fields."""
    results = benchmark_encode(n_dims=3, tiles_per_dim=4, num_tilings=2, n_calls=20)
    assert results["vec_length"] == 2 * 4**3 + 1
    assert results["total_time_sec"] > 0.0


def test_benchmark_encode_with_workers() -> None:
    """Test the fan-out variant of the encode benchmark."""
    results = benchmark_encode(
        n_dims=2, tiles_per_dim=4, num_tilings=4, n_calls=10, dense=False, n_workers=2
    )
    assert results["n_calls"] == 10


def test_benchmark_encode_batch_numpy_and_torch() -> None:
    """Test that both batch backends can be benchmarked."""
    for use_torch in (False, True):
        results = benchmark_encode_batch(
            n_dims=2, tiles_per_dim=4, num_tilings=2, n_samples=50, use_torch=use_torch
        )
        assert results["samples_per_sec"] > 0.0
