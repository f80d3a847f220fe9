"""Core diagnostic functions for tile-coded feature vectors."""

from __future__ import annotations

import numpy as np


def is_binary(vector: np.ndarray, atol: float = 0.0) -> bool:
    """
    Check whether every entry of an array is 0.0 or 1.0.

    Parameters
    ----------
    vector:
        Array of any shape.
    atol:
        Absolute tolerance applied to both targets.

    Returns
    -------
    bool
        True if the array only holds zeros and ones.
    """
    arr = np.asarray(vector, dtype=np.float64)
    return bool(np.all((np.abs(arr) <= atol) | (np.abs(arr - 1.0) <= atol)))


def assert_tile_coded(
    vector: np.ndarray,
    num_active: int,
    atol: float = 0.0,
) -> None:
    """
    Assert that a dense vector looks like the output of a tile coder.

    A tile-coded vector is one-dimensional, binary, and has exactly one
    active feature per tiling (plus one for the bias unit, if any).

    Parameters
    ----------
    vector:
        Dense feature vector.
    num_active:
        Expected number of entries equal to one.
    atol:
        Absolute tolerance for the binary check.

    Raises
    ------
    ValueError
        If the vector is not one-dimensional, not binary, or does not have
        exactly num_active ones.
    """
    arr = np.asarray(vector, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(
            f"Tile-coded vector must be 1D, got shape {arr.shape}."
        )
    if not is_binary(arr, atol=atol):
        raise ValueError("Vector is not a tile-coded vector: entries outside {0, 1}.")

    active = int(np.count_nonzero(np.abs(arr - 1.0) <= atol))
    if active != num_active:
        raise ValueError(
            f"Vector is not a tile-coded vector: expected {num_active} active "
            f"features, found {active}."
        )


def out_of_bounds_dims(
    v: np.ndarray,
    low: np.ndarray,
    high: np.ndarray,
) -> np.ndarray:
    """
    Return the dimensions of v that fall outside [low, high].

    Parameters
    ----------
    v:
        Input vector with shape (n_dims,).
    low, high:
        Per-dimension bounds with shape (n_dims,).

    Returns
    -------
    np.ndarray
        Sorted integer array of offending dimension indices (may be empty).
    """
    v = np.asarray(v, dtype=np.float64)
    mask = (v < low) | (v > high)
    return np.flatnonzero(mask)
