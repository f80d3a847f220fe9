"""PyTorch integration for tile coding."""

from .encode import encode_batch_torch, encode_indices_torch
from .layers import TileCodedLinear
from .utils import as_index_tensor, infer_device, table_to_tensor

__all__ = [
    "encode_batch_torch",
    "encode_indices_torch",
    "TileCodedLinear",
    "as_index_tensor",
    "infer_device",
    "table_to_tensor",
]
