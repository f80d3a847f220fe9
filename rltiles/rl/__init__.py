"""Reinforcement learning with tile-coded features.

This module provides the pieces needed to run linear value-based agents on
continuous-observation environments:

- Environment specs describing the bounds of observations and actions
- A reference environment: MountainCar
- Wrappers that tile code observations (dense or as active indices)
- Semi-gradient linear Q-learning on tile-coded features

All algorithms are deterministic when RNG seeds are fixed.
"""

from .envs import Env, MountainCar
from .linear import action_values, greedy_policy_from_weights, linear_q_learning
from .spec import Cardinality, Spec, SpecType
from .utils import (
    constant_schedule,
    epsilon_greedy_action,
    evaluate_policy,
    linear_decay_schedule,
    seed_rng,
)
from .wrappers import IndexTileCoding, TileCoding

__all__ = [
    # Specs
    "Spec",
    "SpecType",
    "Cardinality",
    # Environments
    "Env",
    "MountainCar",
    # Wrappers
    "TileCoding",
    "IndexTileCoding",
    # Linear learning
    "action_values",
    "linear_q_learning",
    "greedy_policy_from_weights",
    # Utilities
    "seed_rng",
    "epsilon_greedy_action",
    "evaluate_policy",
    "constant_schedule",
    "linear_decay_schedule",
]
