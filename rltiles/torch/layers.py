"""PyTorch modules operating on tile-coded features."""

from __future__ import annotations

from typing import Any

import torch
import torch.nn as nn

from rltiles.tilecoding.core import TileCoder
from rltiles.torch.utils import as_index_tensor


class TileCodedLinear(nn.Module):
    """
    Linear function of a tile-coded vector, evaluated from its active indices.

    For a binary feature vector x with active positions I, ``W x`` is the sum
    of the columns of W indexed by I. This module stores W as an
    ``nn.EmbeddingBag`` in sum mode so only the active rows are touched in
    both the forward and backward pass.

    Parameters
    ----------
    num_features:
        Length of the dense tile-coded vector (``coder.vec_length``).
    out_features:
        Number of outputs, e.g. one per action for action values.
    init_value:
        Constant every weight is initialised to.

    Examples
    --------
    >>> coder = TileCoder([0.0], [1.0], [[4], [4]], seed=0, include_bias=True)
    >>> head = TileCodedLinear.from_coder(coder, out_features=3)
    >>> head(coder.encode_indices([0.3])).shape
    torch.Size([3])
    """

    def __init__(
        self,
        num_features: int,
        out_features: int,
        init_value: float = 0.0,
    ) -> None:
        super().__init__()
        if num_features < 1:
            raise ValueError(f"num_features must be >= 1, got {num_features}")
        if out_features < 1:
            raise ValueError(f"out_features must be >= 1, got {out_features}")

        self.num_features = num_features
        self.out_features = out_features
        self.bag = nn.EmbeddingBag(
            num_features, out_features, mode="sum", dtype=torch.float64
        )
        nn.init.constant_(self.bag.weight, init_value)

    @classmethod
    def from_coder(
        cls,
        coder: TileCoder,
        out_features: int,
        init_value: float = 0.0,
    ) -> "TileCodedLinear":
        """Build a module sized for the features of ``coder``."""
        return cls(coder.vec_length, out_features, init_value=init_value)

    @property
    def weight(self) -> torch.Tensor:
        """Weights with shape (num_features, out_features)."""
        return self.bag.weight

    def forward(self, indices: Any) -> torch.Tensor:
        """
        Evaluate the linear map.

        Parameters
        ----------
        indices:
            Active indices, shape (num_active,) for a single sample or
            (batch, num_active) for a batch. Tensors, numpy arrays such as
            the output of ``TileCoder.encode_indices`` and lists are all
            accepted and moved to the device of the weights.

        Returns
        -------
        torch.Tensor
            Shape (out_features,) or (batch, out_features).
        """
        indices = as_index_tensor(indices, device=self.bag.weight.device)
        if indices.dim() == 1:
            return self.bag(indices.unsqueeze(0)).squeeze(0)
        if indices.dim() != 2:
            raise ValueError(
                f"indices must be 1D or 2D, got shape {tuple(indices.shape)}"
            )
        return self.bag(indices)

    def extra_repr(self) -> str:
        return f"num_features={self.num_features}, out_features={self.out_features}"
