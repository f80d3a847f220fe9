"""Utility functions for PyTorch integration with rltiles."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
import torch


def infer_device(device: Optional[torch.device | str]) -> torch.device:
    """
    Infer the PyTorch device to use.

    Parameters
    ----------
    device:
        Optional device or device string. If None, uses the CPU.

    Returns
    -------
    torch.device
        The device to use for computation.
    """
    if device is None:
        return torch.device("cpu")
    return torch.device(device)


def table_to_tensor(
    table: np.ndarray,
    dtype: torch.dtype,
    device: torch.device,
) -> torch.Tensor:
    """
    Copy a (possibly read-only) numpy table onto a device.

    Tile coder tables are read-only, which torch refuses to share memory
    with, so the data is always copied.
    """
    return torch.from_numpy(np.array(table, copy=True)).to(device=device, dtype=dtype)


def as_index_tensor(
    indices: Any,
    device: Optional[torch.device | str] = None,
) -> torch.Tensor:
    """
    Convert tile indices (list, numpy array or tensor) to a long tensor.

    Parameters
    ----------
    indices:
        Active feature indices, shape (num_active,) or (batch, num_active).
    device:
        Optional target device.

    Returns
    -------
    torch.Tensor
        Tensor with dtype torch.long on the target device.
    """
    target_device = infer_device(device)
    if isinstance(indices, torch.Tensor):
        return indices.to(device=target_device, dtype=torch.long)
    array = np.array(indices, dtype=np.int64, copy=True)
    return torch.from_numpy(array).to(device=target_device)
