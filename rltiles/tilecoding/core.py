"""Dense multi-tiling tile coder.

Tile coding turns a low-dimensional bounded vector into a large, sparse,
binary vector. Each tiling partitions the whole space into a grid; the
vector activates exactly one tile per tiling, so the encoding has one
non-zero entry per tiling (plus an optional always-on bias unit):

    [0.5, 0.1] -> [0, 0, 0, 1, 0, 0, 1, 0]

Tilings are dense (every dimension fully tiled, no hashing) and each is
displaced by its own random offset, which is what lets several coarse
tilings together resolve finer detail than any single one.
"""

from __future__ import annotations

from concurrent.futures import ALL_COMPLETED, Executor, wait
from typing import Any, Optional, Sequence

import numpy as np

from rltiles.diagnostics import assert_tile_coded, is_binary, out_of_bounds_dims
from rltiles.diagnostics.debug_mode import is_debug_enabled
from rltiles.logging import get_logger
from rltiles.tilecoding.utils import (
    check_batch,
    check_tile_count,
    check_vector,
    floor_clip,
    row_major_strides,
)

logger = get_logger(__name__)

# Offsets along each dimension are drawn from
# U[-tile_width / OFFSET_DIV, tile_width / OFFSET_DIV].
OFFSET_DIV = 1.5


def _as_bound(values: Any, name: str) -> np.ndarray:
    try:
        bound = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} cannot be converted to a float vector.") from exc
    if bound.ndim != 1:
        raise ValueError(f"{name} must be a 1D vector, got shape {bound.shape}.")
    return bound


def _check_tile_counts(tile_counts: Any, n_dims: int) -> np.ndarray:
    try:
        tilings = [list(tiling) for tiling in tile_counts]
    except TypeError as exc:
        raise ValueError(
            "tile_counts must be a sequence of per-dimension tile counts, "
            "one sequence per tiling."
        ) from exc

    if len(tilings) == 0:
        raise ValueError("tile_counts must describe at least one tiling.")

    for t, tiling in enumerate(tilings):
        if len(tiling) != n_dims:
            raise ValueError(
                f"tiling {t} specifies {len(tiling)} tile counts, "
                f"expected one per dimension ({n_dims})."
            )
        for d, count in enumerate(tiling):
            check_tile_count(count, f"tiling {t}, dimension {d}")
            if count < 1:
                raise ValueError(
                    f"tile count for tiling {t}, dimension {d} must be >= 1, "
                    f"got {count}."
                )

    return np.asarray(tilings, dtype=np.int64)


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class TileCoder:
    """
    Tile coder over a bounded box of R^n using one or more dense tilings.

    The coder is immutable once built: every encoding method is a pure
    function of its input and the tiling data, so a single instance can be
    shared between threads without locking.

    Args:
        min_bound: Lower bound of each dimension, shape (n_dims,).
        max_bound: Upper bound of each dimension, shape (n_dims,).
        tile_counts: One sequence per tiling giving the number of tiles along
            each dimension, e.g. ``[[2, 2], [4, 3]]`` is a 2x2 tiling plus a
            4x3 tiling. The outer length is the number of tilings.
        seed: Seed for the generator that samples tiling offsets.
        include_bias: Reserve feature 0 as an always-active bias unit.
        offsets: Optional explicit offsets of shape (num_tilings, n_dims)
            used instead of sampled ones (e.g. zeros for calibration).

    Raises:
        ValueError: If the bounds or tilings are inconsistent.

    Examples:
        >>> coder = TileCoder([0.0], [1.0], [[2]], offsets=[[0.0]])
        >>> coder.encode([0.25])
        array([1., 0.])
        >>> coder.encode_indices([1.0])
        array([1])
    """

    def __init__(
        self,
        min_bound: Sequence[float] | np.ndarray,
        max_bound: Sequence[float] | np.ndarray,
        tile_counts: Sequence[Sequence[int]] | np.ndarray,
        seed: int = 0,
        include_bias: bool = False,
        offsets: Optional[Sequence[Sequence[float]] | np.ndarray] = None,
    ) -> None:
        low = _as_bound(min_bound, "min_bound")
        high = _as_bound(max_bound, "max_bound")
        if low.shape != high.shape:
            raise ValueError(
                "min_bound and max_bound must have the same number of "
                f"dimensions: {low.shape[0]} != {high.shape[0]}."
            )
        n_dims = low.shape[0]
        if n_dims < 1:
            raise ValueError("Cannot tile a space with zero dimensions.")
        if not (np.all(np.isfinite(low)) and np.all(np.isfinite(high))):
            raise ValueError("Tiling bounds must be finite.")
        bad_dims = np.flatnonzero(low >= high)
        if bad_dims.size > 0:
            raise ValueError(
                f"min_bound must be strictly less than max_bound; violated "
                f"along dimensions {bad_dims.tolist()}."
            )

        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise ValueError(f"seed must be an integer, got {seed!r}.")
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}.")

        counts = _check_tile_counts(tile_counts, n_dims)
        num_tilings = counts.shape[0]
        widths = (high - low)[np.newaxis, :] / counts

        if offsets is None:
            rng = np.random.default_rng(int(seed))
            bound = widths / OFFSET_DIV
            sampled = np.empty_like(widths)
            # One independent n_dims-dimensional draw per tiling.
            for t in range(num_tilings):
                sampled[t] = rng.uniform(-bound[t], bound[t])
            offset_table = sampled
        else:
            offset_table = np.array(offsets, dtype=np.float64)
            if offset_table.shape != (num_tilings, n_dims):
                raise ValueError(
                    f"offsets must have shape ({num_tilings}, {n_dims}), "
                    f"got {offset_table.shape}."
                )
            if not np.all(np.isfinite(offset_table)):
                raise ValueError("offsets must be finite.")

        features_per_tiling = counts.prod(axis=1)
        starts = np.concatenate(([0], np.cumsum(features_per_tiling))).astype(np.int64)
        bias = 1 if include_bias else 0

        self._min_bound = _readonly(low.copy())
        self._max_bound = _readonly(high.copy())
        self._tile_counts = _readonly(counts)
        self._tile_widths = _readonly(widths)
        self._offsets = _readonly(offset_table)
        self._strides = _readonly(row_major_strides(counts))
        self._starts = _readonly(starts)
        self._base = _readonly(starts[:-1] + bias)
        self._last_tile = _readonly(counts - 1)
        self._include_bias = bool(include_bias)
        self._seed = int(seed)

        logger.debug("Constructed %r with %d features", self, self.vec_length)

    @property
    def num_tilings(self) -> int:
        """Number of tilings."""
        return int(self._tile_counts.shape[0])

    @property
    def n_dims(self) -> int:
        """Number of input dimensions."""
        return int(self._tile_counts.shape[1])

    @property
    def vec_length(self) -> int:
        """Length of every dense tile-coded vector."""
        return int(self._starts[-1]) + (1 if self._include_bias else 0)

    @property
    def num_active(self) -> int:
        """Number of active features per encoding (tilings plus bias)."""
        return self.num_tilings + (1 if self._include_bias else 0)

    @property
    def include_bias(self) -> bool:
        return self._include_bias

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def min_bound(self) -> np.ndarray:
        return self._min_bound

    @property
    def max_bound(self) -> np.ndarray:
        return self._max_bound

    @property
    def tile_counts(self) -> np.ndarray:
        return self._tile_counts

    @property
    def tile_widths(self) -> np.ndarray:
        return self._tile_widths

    @property
    def offsets(self) -> np.ndarray:
        return self._offsets

    @property
    def strides(self) -> np.ndarray:
        """Row-major mixed-radix strides, shape (num_tilings, n_dims)."""
        return self._strides

    @property
    def tiling_bases(self) -> np.ndarray:
        """Position of the first feature of each tiling, bias included."""
        return self._base

    def __len__(self) -> int:
        return self.vec_length

    def __repr__(self) -> str:
        return (
            f"TileCoder(num_tilings={self.num_tilings}, "
            f"tile_counts={self._tile_counts.tolist()}, "
            f"include_bias={self._include_bias})"
        )

    def features_before_tiling(self, tiling: int) -> int:
        """
        Number of tiling features that precede tiling number ``tiling``.

        The bias unit, if any, is not counted. ``tiling == num_tilings`` is
        accepted and returns the total number of tiling features.
        """
        if tiling < 0 or tiling > self.num_tilings:
            raise ValueError(
                f"tiling must be in [0, {self.num_tilings}], got {tiling}."
            )
        return int(self._starts[tiling])

    def _report_out_of_bounds(self, values: np.ndarray) -> None:
        dims = out_of_bounds_dims(values, self._min_bound, self._max_bound)
        if dims.size > 0:
            logger.warning(
                "Input outside tiling bounds along dimensions %s; clamping "
                "to boundary tiles.",
                dims.tolist(),
            )

    def _encode_with_tiling(self, v: np.ndarray, tiling: int) -> int:
        # Index of the active feature for a single tiling.
        scaled = (v + self._offsets[tiling] - self._min_bound) / self._tile_widths[tiling]
        tiles = floor_clip(scaled, self._last_tile[tiling])
        return int(self._base[tiling] + np.dot(tiles, self._strides[tiling]))

    def _encode_all_tilings(self, v: np.ndarray) -> np.ndarray:
        scaled = (
            v[np.newaxis, :] + self._offsets - self._min_bound[np.newaxis, :]
        ) / self._tile_widths
        tiles = floor_clip(scaled, self._last_tile)
        return (tiles * self._strides).sum(axis=1) + self._base

    def encode_indices(
        self,
        v: Sequence[float] | np.ndarray,
        executor: Optional[Executor] = None,
    ) -> np.ndarray:
        """
        Return the positions of the non-zero features of ``encode(v)``.

        Positions are sorted ascending: the bias unit (0) first when
        configured, then one index per tiling in tiling order.

        If an executor is given, each tiling is computed as its own task and
        the call waits for all of them before assembling the result. The
        futures belong to this call only, so concurrent calls on the same
        coder never see each other's results.

        The call blocks until every per-tiling task has run. Do not pass the
        executor that is running the caller itself: once its workers are all
        busy waiting like this, the per-tiling tasks are never scheduled and
        the call deadlocks. Use a separate pool for the inner fan-out.

        Args:
            v: Input vector, shape (n_dims,). Values outside the bounds are
                clamped to the boundary tiles.
            executor: Optional executor used to fan out per-tiling work.

        Returns:
            Integer array of shape (num_active,).

        Raises:
            ValueError: If v has the wrong shape or contains NaN.
        """
        values = check_vector(v, self.n_dims)
        if is_debug_enabled():
            self._report_out_of_bounds(values)

        if executor is None:
            tiling_indices = self._encode_all_tilings(values)
        else:
            futures = [
                executor.submit(self._encode_with_tiling, values, tiling)
                for tiling in range(self.num_tilings)
            ]
            wait(futures, return_when=ALL_COMPLETED)
            tiling_indices = np.fromiter(
                (future.result() for future in futures),
                dtype=np.int64,
                count=self.num_tilings,
            )

        if self._include_bias:
            return np.concatenate((np.zeros(1, dtype=np.int64), tiling_indices))
        return tiling_indices.astype(np.int64, copy=False)

    def encode(
        self,
        v: Sequence[float] | np.ndarray,
        executor: Optional[Executor] = None,
    ) -> np.ndarray:
        """
        Tile code a single vector.

        Args:
            v: Input vector, shape (n_dims,).
            executor: Optional executor, see :meth:`encode_indices`.

        Returns:
            Dense float64 vector of shape (vec_length,) with exactly
            ``num_active`` entries equal to 1.0.
        """
        tile_coded = np.zeros(self.vec_length, dtype=np.float64)
        tile_coded[self.encode_indices(v, executor=executor)] = 1.0

        if is_debug_enabled():
            assert_tile_coded(tile_coded, self.num_active)
        return tile_coded

    def encode_batch(self, batch: np.ndarray) -> np.ndarray:
        """
        Tile code a batch of vectors.

        Each row of ``batch`` is a dimension and each column a sample, so
        the input has shape (n_dims, n_samples). Column i of the result is
        exactly ``encode(batch[:, i])``. In debug mode every column is
        checked the same way ``encode`` checks its output.

        Returns:
            Dense float64 matrix of shape (vec_length, n_samples).
        """
        values = check_batch(batch, self.n_dims)
        n_samples = values.shape[1]
        if is_debug_enabled():
            for column in values.T:
                self._report_out_of_bounds(column)

        # (n_tilings, n_dims, n_samples)
        scaled = (
            values[np.newaxis, :, :]
            + self._offsets[:, :, np.newaxis]
            - self._min_bound[np.newaxis, :, np.newaxis]
        ) / self._tile_widths[:, :, np.newaxis]
        tiles = floor_clip(scaled, self._last_tile[:, :, np.newaxis])
        rows = (tiles * self._strides[:, :, np.newaxis]).sum(axis=1)
        rows += self._base[:, np.newaxis]

        tile_coded = np.zeros((self.vec_length, n_samples), dtype=np.float64)
        columns = np.broadcast_to(np.arange(n_samples), rows.shape)
        tile_coded[rows, columns] = 1.0
        if self._include_bias:
            tile_coded[0, :] = 1.0

        if is_debug_enabled():
            for sample in tile_coded.T:
                assert_tile_coded(sample, self.num_active)
        return tile_coded

    def to_vector(self, indices: Sequence[int] | np.ndarray) -> np.ndarray:
        """
        Convert a list of non-zero positions into a dense tile-coded vector.

        Raises:
            ValueError: If the indices are not integral or out of range.
        """
        arr = np.asarray(indices)
        if arr.ndim != 1:
            raise ValueError(f"indices must be 1D, got shape {arr.shape}.")
        if arr.size > 0 and not np.issubdtype(arr.dtype, np.integer):
            if not np.issubdtype(arr.dtype, np.floating) or not np.all(
                arr == np.floor(arr)
            ):
                raise ValueError("indices must be integral.")
        positions = arr.astype(np.int64)
        if positions.size > 0 and (
            positions.min() < 0 or positions.max() >= self.vec_length
        ):
            raise ValueError(
                f"indices must be in [0, {self.vec_length}), got range "
                f"[{positions.min()}, {positions.max()}]."
            )
        tile_coded = np.zeros(self.vec_length, dtype=np.float64)
        tile_coded[positions] = 1.0
        return tile_coded

    def to_indices(self, vector: Sequence[float] | np.ndarray) -> np.ndarray:
        """
        Convert a dense tile-coded vector into its sorted non-zero positions.

        Raises:
            ValueError: If the vector is not a tile-coded vector of this coder.
        """
        arr = np.asarray(vector, dtype=np.float64)
        if arr.shape != (self.vec_length,):
            raise ValueError(
                f"Expected tile-coded vector of shape ({self.vec_length},), "
                f"got {arr.shape}."
            )
        if not is_binary(arr):
            raise ValueError("Vector is not a tile-coded vector: entries outside {0, 1}.")
        positions = np.flatnonzero(arr).astype(np.int64)
        if positions.size != self.num_active:
            raise ValueError(
                f"Vector is not a tile-coded vector: expected {self.num_active} "
                f"active features, found {positions.size}."
            )
        return positions
