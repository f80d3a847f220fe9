"""Benchmark tile coding hot paths."""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

import numpy as np
import torch

import rltiles as rt
from rltiles.torch import encode_batch_torch


def _make_coder(n_dims: int, tiles_per_dim: int, num_tilings: int) -> rt.TileCoder:
    config = rt.TileCoderConfig.uniform(num_tilings, tiles_per_dim, n_dims=n_dims, seed=12)
    return rt.create_tile_coder(config, np.zeros(n_dims), np.ones(n_dims))


def benchmark_encode(
    n_dims: int,
    tiles_per_dim: int,
    num_tilings: int = 1,
    n_calls: int = 10000,
    dense: bool = True,
    n_workers: Optional[int] = None,
) -> Dict[str, float]:
    """Benchmark single-vector encoding.

    Args:
        n_dims: Number of input dimensions.
        tiles_per_dim: Tiles along every dimension of every tiling.
        num_tilings: Number of tilings.
        n_calls: Number of vectors to encode.
        dense: Time encode (dense) instead of encode_indices.
        n_workers: If set, fan tilings out to a thread pool of this size.

    Returns:
        Dictionary with timing results.
    """
    coder = _make_coder(n_dims, tiles_per_dim, num_tilings)
    rng = np.random.default_rng(0)
    inputs = rng.uniform(0.0, 1.0, size=(n_calls, n_dims))
    encode = coder.encode if dense else coder.encode_indices

    executor = ThreadPoolExecutor(max_workers=n_workers) if n_workers else None
    try:
        # Warmup
        encode(inputs[0], executor=executor)

        start = time.perf_counter()
        for v in inputs:
            encode(v, executor=executor)
        end = time.perf_counter()
    finally:
        if executor is not None:
            executor.shutdown()

    total_time = end - start
    return {
        "n_dims": n_dims,
        "vec_length": coder.vec_length,
        "n_calls": n_calls,
        "total_time_sec": total_time,
        "time_per_call_sec": total_time / n_calls,
    }


def benchmark_encode_batch(
    n_dims: int,
    tiles_per_dim: int,
    num_tilings: int,
    n_samples: int = 10000,
    use_torch: bool = False,
) -> Dict[str, float]:
    """Benchmark batch encoding with numpy or torch.

    Returns:
        Dictionary with timing results.
    """
    coder = _make_coder(n_dims, tiles_per_dim, num_tilings)
    rng = np.random.default_rng(0)
    batch = rng.uniform(0.0, 1.0, size=(n_dims, n_samples))

    if use_torch:
        tensor = torch.from_numpy(batch)
        encode_batch_torch(coder, tensor[:, :10])
        start = time.perf_counter()
        encode_batch_torch(coder, tensor)
        end = time.perf_counter()
    else:
        coder.encode_batch(batch[:, :10])
        start = time.perf_counter()
        coder.encode_batch(batch)
        end = time.perf_counter()

    total_time = end - start
    return {
        "n_samples": n_samples,
        "total_time_sec": total_time,
        "samples_per_sec": n_samples / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking tile coding...")

    # One 8^8 tiling over 8 dimensions: 16.7M features, so only indices
    results = benchmark_encode(n_dims=8, tiles_per_dim=8, n_calls=10000, dense=False)
    print(f"encode_indices (8 dims, 8^8 tiles):")
    print(f"  Time per call: {results['time_per_call_sec']*1e6:.2f} μs")

    results = benchmark_encode(n_dims=2, tiles_per_dim=8, num_tilings=8, n_calls=10000)
    print(f"encode (2 dims, 8 tilings of 8x8):")
    print(f"  Time per call: {results['time_per_call_sec']*1e6:.2f} μs")

    results = benchmark_encode(
        n_dims=2, tiles_per_dim=8, num_tilings=8, n_calls=2000, n_workers=4
    )
    print(f"encode with 4 worker threads (2 dims, 8 tilings of 8x8):")
    print(f"  Time per call: {results['time_per_call_sec']*1e6:.2f} μs")

    for use_torch in (False, True):
        results = benchmark_encode_batch(
            n_dims=2, tiles_per_dim=8, num_tilings=8, n_samples=10000, use_torch=use_torch
        )
        label = "torch" if use_torch else "numpy"
        print(f"encode_batch [{label}] (10k samples):")
        print(f"  Samples per second: {results['samples_per_sec']:.0f}")
