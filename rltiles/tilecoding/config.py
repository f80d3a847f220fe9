"""Configuration objects and factory for tile coders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from rltiles.tilecoding.core import TileCoder
from rltiles.tilecoding.utils import check_tile_count, prod


@dataclass(frozen=True)
class TileCoderConfig:
    """
    Description of a set of tilings, independent of the space being tiled.

    The bounds come from whatever is being encoded (usually an environment's
    observation spec), so a config can be reused across environments with
    the same dimensionality.

    Args:
        tile_counts: One tuple per tiling with the number of tiles along each
            dimension. Normalised to a tuple of tuples of ints; numpy integers
            are accepted, anything else that is not an integer (floats, bools,
            strings) raises ValueError rather than being truncated.
        seed: Seed for sampling tiling offsets.
        include_bias: Whether feature 0 is an always-active bias unit.
            Defaults to True, as linear learners usually want one.
    """

    tile_counts: tuple[tuple[int, ...], ...]
    seed: int = 0
    include_bias: bool = True

    def __post_init__(self) -> None:
        try:
            tilings = [tuple(tiling) for tiling in self.tile_counts]
        except TypeError as exc:
            raise ValueError(
                "tile_counts must be a sequence of per-dimension tile counts, "
                "one sequence per tiling."
            ) from exc
        # Ranges and dimensionality are checked by TileCoder once bounds are known.
        normalised = tuple(
            tuple(
                check_tile_count(count, f"tiling {t}, dimension {d}")
                for d, count in enumerate(tiling)
            )
            for t, tiling in enumerate(tilings)
        )
        object.__setattr__(self, "tile_counts", normalised)

    @property
    def num_tilings(self) -> int:
        return len(self.tile_counts)

    @property
    def num_features(self) -> int:
        """Dense feature-vector length of a coder built from this config."""
        bias = 1 if self.include_bias else 0
        return sum(prod(tiling) for tiling in self.tile_counts) + bias

    @classmethod
    def uniform(
        cls,
        num_tilings: int,
        tiles_per_dim: int | Sequence[int],
        n_dims: int | None = None,
        seed: int = 0,
        include_bias: bool = True,
    ) -> "TileCoderConfig":
        """
        Build ``num_tilings`` identical tilings.

        Args:
            num_tilings: Number of tilings (>= 1).
            tiles_per_dim: Either one count used for every dimension (then
                ``n_dims`` is required) or one count per dimension.
            n_dims: Number of dimensions when ``tiles_per_dim`` is an int.

        Examples:
            >>> TileCoderConfig.uniform(2, 4, n_dims=2).tile_counts
            ((4, 4), (4, 4))
        """
        if num_tilings < 1:
            raise ValueError(f"num_tilings must be >= 1, got {num_tilings}")
        if np.ndim(tiles_per_dim) == 0:
            count = check_tile_count(tiles_per_dim, "every dimension")
            if n_dims is None:
                raise ValueError("n_dims is required when tiles_per_dim is an int.")
            tiling = (count,) * n_dims
        else:
            tiling = tuple(tiles_per_dim)
            if n_dims is not None and len(tiling) != n_dims:
                raise ValueError(
                    f"tiles_per_dim has {len(tiling)} entries, expected {n_dims}."
                )
        return cls(
            tile_counts=(tiling,) * num_tilings,
            seed=seed,
            include_bias=include_bias,
        )

    @classmethod
    def stacked(
        cls,
        groups: Iterable["TileCoderConfig"],
        seed: int = 0,
        include_bias: bool = True,
    ) -> "TileCoderConfig":
        """
        Concatenate the tilings of several configs into one.

        Useful for mixing resolutions, e.g. five 5x5 tilings plus five 3x3
        tilings. The seeds and bias flags of the groups are ignored.
        """
        tile_counts: list[tuple[int, ...]] = []
        for group in groups:
            tile_counts.extend(group.tile_counts)
        return cls(
            tile_counts=tuple(tile_counts),
            seed=seed,
            include_bias=include_bias,
        )


def create_tile_coder(
    config: TileCoderConfig,
    min_bound: Sequence[float] | np.ndarray,
    max_bound: Sequence[float] | np.ndarray,
) -> TileCoder:
    """
    Create a TileCoder for the box [min_bound, max_bound] from a config.

    Validation is left to TileCoder, so configuration errors surface as the
    same ValueError whichever way the coder is built.

    Args:
        config: Tiling description.
        min_bound: Lower bound per dimension.
        max_bound: Upper bound per dimension.

    Returns:
        A new TileCoder.
    """
    return TileCoder(
        min_bound=min_bound,
        max_bound=max_bound,
        tile_counts=config.tile_counts,
        seed=config.seed,
        include_bias=config.include_bias,
    )
