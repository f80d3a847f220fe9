"""Tile coding of bounded continuous vectors."""

from .config import TileCoderConfig, create_tile_coder
from .core import OFFSET_DIV, TileCoder
from .utils import (
    check_batch,
    check_tile_count,
    check_vector,
    floor_clip,
    prod,
    row_major_strides,
)

__all__ = [
    "OFFSET_DIV",
    "TileCoder",
    "TileCoderConfig",
    "create_tile_coder",
    "check_vector",
    "check_batch",
    "check_tile_count",
    "prod",
    "row_major_strides",
    "floor_clip",
]
