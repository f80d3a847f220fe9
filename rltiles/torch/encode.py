"""Batched tile coding on PyTorch tensors.

These functions mirror TileCoder.encode_batch for tensors that already
live on a device, so observations collected on a GPU do not need a round
trip through numpy. Arithmetic is done in float64 with the same operation
order as the numpy path, which keeps the two bit-for-bit consistent.
"""

from __future__ import annotations

from typing import Optional

import torch

from rltiles.tilecoding.core import TileCoder
from rltiles.torch.utils import infer_device, table_to_tensor


def _check_batch_tensor(coder: TileCoder, batch: torch.Tensor) -> None:
    if not isinstance(batch, torch.Tensor):
        raise ValueError(f"batch must be a torch.Tensor, got {type(batch).__name__}.")
    if batch.is_complex():
        raise ValueError("Complex data is not supported.")
    if batch.dim() != 2:
        raise ValueError(
            "Expected 2D batch with shape (n_dims, n_samples), "
            f"got shape {tuple(batch.shape)}."
        )
    if batch.shape[0] != coder.n_dims:
        raise ValueError(
            f"Expected batch with {coder.n_dims} rows (one per dimension), "
            f"got {batch.shape[0]}."
        )


def _tiling_rows(
    coder: TileCoder,
    batch: torch.Tensor,
    device: torch.device,
) -> torch.Tensor:
    """Active feature row per (tiling, sample), shape (num_tilings, n_samples)."""
    x = batch.to(device=device, dtype=torch.float64)
    if torch.isnan(x).any():
        raise ValueError("Batch contains NaN values.")

    low = table_to_tensor(coder.min_bound, torch.float64, device)
    offsets = table_to_tensor(coder.offsets, torch.float64, device)
    widths = table_to_tensor(coder.tile_widths, torch.float64, device)
    last_tile = table_to_tensor(coder.tile_counts - 1, torch.float64, device)

    scaled = (
        x.unsqueeze(0) + offsets.unsqueeze(2) - low.view(1, -1, 1)
    ) / widths.unsqueeze(2)
    tiles = torch.floor(scaled)
    tiles = torch.maximum(tiles, torch.zeros_like(tiles))
    tiles = torch.minimum(tiles, last_tile.unsqueeze(2).expand_as(tiles))

    strides = table_to_tensor(coder.strides, torch.long, device)
    base = table_to_tensor(coder.tiling_bases, torch.long, device)
    rows = (tiles.long() * strides.unsqueeze(2)).sum(dim=1)
    return rows + base.unsqueeze(1)


def encode_batch_torch(
    coder: TileCoder,
    batch: torch.Tensor,
    device: Optional[torch.device | str] = None,
    dtype: torch.dtype = torch.float64,
) -> torch.Tensor:
    """
    Tile code a batch tensor of shape (n_dims, n_samples).

    Parameters
    ----------
    coder:
        Tile coder providing bounds, tilings and offsets.
    batch:
        Tensor whose columns are samples.
    device:
        Device for the result. Defaults to the device of ``batch``.
    dtype:
        Floating dtype of the result.

    Returns
    -------
    torch.Tensor
        Tensor of shape (vec_length, n_samples); column i equals
        ``coder.encode(batch[:, i])``.

    Raises
    ------
    ValueError
        If the batch has the wrong shape or contains NaN.
    """
    _check_batch_tensor(coder, batch)
    target_device = infer_device(device if device is not None else batch.device)

    rows = _tiling_rows(coder, batch, target_device)
    n_samples = batch.shape[1]
    tile_coded = torch.zeros(
        (coder.vec_length, n_samples), dtype=dtype, device=target_device
    )
    columns = torch.arange(n_samples, device=target_device).expand_as(rows)
    tile_coded[rows, columns] = 1.0
    if coder.include_bias:
        tile_coded[0, :] = 1.0
    return tile_coded


def encode_indices_torch(
    coder: TileCoder,
    batch: torch.Tensor,
    device: Optional[torch.device | str] = None,
) -> torch.Tensor:
    """
    Active feature indices for each sample of a (n_dims, n_samples) batch.

    Returns
    -------
    torch.Tensor
        Long tensor of shape (n_samples, num_active). Row i equals
        ``coder.encode_indices(batch[:, i])``, so it can be fed straight to
        TileCodedLinear.
    """
    _check_batch_tensor(coder, batch)
    target_device = infer_device(device if device is not None else batch.device)

    indices = _tiling_rows(coder, batch, target_device).T
    if coder.include_bias:
        bias = torch.zeros(
            (indices.shape[0], 1), dtype=torch.long, device=target_device
        )
        indices = torch.cat([bias, indices], dim=1)
    return indices.contiguous()
