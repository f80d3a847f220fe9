"""Small numeric helpers shared by the tile-coding code paths."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np


def _as_float_array(X: Any) -> np.ndarray:
    try:
        array = np.asarray(X, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError("Input cannot be converted to a float array.") from exc
    return array


def check_vector(v: Any, n_dims: int) -> np.ndarray:
    """Validate a single input vector of length n_dims.

    Infinite values are allowed (they are clamped like any other
    out-of-range value); NaN is rejected since it falls in no tile.
    """
    if np.iscomplexobj(v):
        raise ValueError("Complex data is not supported.")
    array = _as_float_array(v)
    if array.ndim != 1:
        raise ValueError(f"Expected 1D vector, got shape {array.shape}.")
    if array.shape[0] != n_dims:
        raise ValueError(
            f"Expected vector with {n_dims} dimensions, got {array.shape[0]}."
        )
    if np.isnan(array).any():
        raise ValueError("Vector contains NaN values.")
    return array


def check_batch(batch: Any, n_dims: int) -> np.ndarray:
    """Validate a batch of shape (n_dims, n_samples); columns are samples."""
    if np.iscomplexobj(batch):
        raise ValueError("Complex data is not supported.")
    array = _as_float_array(batch)
    if array.ndim != 2:
        raise ValueError(
            f"Expected 2D batch with shape (n_dims, n_samples), got shape {array.shape}."
        )
    if array.shape[0] != n_dims:
        raise ValueError(
            f"Expected batch with {n_dims} rows (one per dimension), "
            f"got {array.shape[0]}."
        )
    if np.isnan(array).any():
        raise ValueError("Batch contains NaN values.")
    return array


def check_tile_count(count: Any, where: str) -> int:
    """Return ``count`` as a plain int, rejecting bools, floats and strings.

    ``where`` names the count in the error message, e.g.
    ``"tiling 0, dimension 1"``.
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise ValueError(f"tile count for {where} must be an integer, got {count!r}.")
    return int(count)


def prod(values: Iterable[int]) -> int:
    """Product of a sequence of integers (1 for an empty sequence)."""
    result = 1
    for value in values:
        result *= int(value)
    return result


def row_major_strides(tile_counts: np.ndarray) -> np.ndarray:
    """Mixed-radix strides for each tiling, last dimension varying fastest.

    For a tiling with counts (c_0, ..., c_{D-1}) the stride of dimension d
    is c_{d+1} * ... * c_{D-1}.

    Examples:
        >>> row_major_strides(np.array([[4, 3, 2]]))
        array([[6, 2, 1]])
    """
    counts = np.asarray(tile_counts, dtype=np.int64)
    strides = np.ones_like(counts)
    if counts.shape[1] > 1:
        tail_products = np.cumprod(counts[:, :0:-1], axis=1)[:, ::-1]
        strides[:, :-1] = tail_products
    return strides


def floor_clip(
    scaled: np.ndarray,
    upper: np.ndarray,
) -> np.ndarray:
    """Floor tile coordinates and clamp them to [0, upper].

    ``scaled`` holds (value - min) / width; ``upper`` the last valid tile
    index, broadcastable against ``scaled``.
    """
    tiles = np.floor(scaled)
    tiles = np.clip(tiles, 0, upper)
    return tiles.astype(np.int64)
