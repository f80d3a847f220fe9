"""rltiles - tile coding of continuous observations for reinforcement learning."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_tile_coded,
    debug_context,
    is_binary,
    is_debug_enabled,
    out_of_bounds_dims,
    set_debug_enabled,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Reinforcement learning
from .rl import (
    Cardinality,
    Env,
    IndexTileCoding,
    MountainCar,
    Spec,
    SpecType,
    TileCoding,
    greedy_policy_from_weights,
    linear_q_learning,
)

# Tile coding
from .tilecoding import TileCoder, TileCoderConfig, create_tile_coder

__all__ = [
    "__version__",
    # Tile coding
    "TileCoder",
    "TileCoderConfig",
    "create_tile_coder",
    # Reinforcement learning
    "Spec",
    "SpecType",
    "Cardinality",
    "Env",
    "MountainCar",
    "TileCoding",
    "IndexTileCoding",
    "linear_q_learning",
    "greedy_policy_from_weights",
    # Diagnostics
    "is_binary",
    "assert_tile_coded",
    "out_of_bounds_dims",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
