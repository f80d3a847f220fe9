"""Diagnostics and debugging utilities for rltiles."""

from .core import (
    assert_tile_coded,
    is_binary,
    out_of_bounds_dims,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "is_binary",
    "assert_tile_coded",
    "out_of_bounds_dims",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
