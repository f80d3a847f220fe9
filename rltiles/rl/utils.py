"""Utility functions for reinforcement learning with tile-coded features.

This module provides RNG seeding, exploration, schedules and policy
evaluation helpers shared by the environments and learners.
"""

from collections.abc import Callable
from typing import Any, Optional

import numpy as np


def seed_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a seeded NumPy random number generator.

    Args:
        seed: Random seed. If None, defaults to 0 for reproducibility.

    Returns:
        Seeded NumPy random generator.

    Examples:
        >>> rng = seed_rng(42)
        >>> 0 <= rng.integers(10) < 10
        True
    """
    if seed is None:
        seed = 0
    return np.random.default_rng(seed)


def epsilon_greedy_action(
    action_values: np.ndarray,
    epsilon: float,
    rng: np.random.Generator,
) -> int:
    """Select action using epsilon-greedy policy with deterministic tie-breaking.

    With probability (1-epsilon), selects the greedy action (first argmax).
    With probability epsilon, selects uniformly at random.

    Args:
        action_values: Action values for the current state, shape (n_actions,).
        epsilon: Exploration probability in [0, 1].
        rng: Random number generator for exploration.

    Returns:
        Selected action index.

    Examples:
        >>> rng = seed_rng(0)
        >>> epsilon_greedy_action(np.array([0.5, 0.8, 0.3]), epsilon=0.0, rng=rng)
        1
    """
    if epsilon < 0 or epsilon > 1:
        raise ValueError(f"epsilon must be in [0, 1], got {epsilon}")

    if rng.random() < epsilon:
        return int(rng.integers(len(action_values)))
    return int(np.argmax(action_values))


def evaluate_policy(
    env: Any,  # Env type, but avoid circular import
    policy: Callable[[np.ndarray], int],
    num_episodes: int,
) -> tuple[float, float]:
    """Evaluate a policy by running episodes and computing average return.

    Args:
        env: Environment implementing reset() and step(). Episodes must
            terminate on their own (e.g. through a step limit).
        policy: Function mapping observation -> action.
        num_episodes: Number of episodes to run.

    Returns:
        Tuple of (average_return, std_return) across episodes.
    """
    if num_episodes < 1:
        raise ValueError(f"num_episodes must be >= 1, got {num_episodes}")

    episode_returns = []

    for _ in range(num_episodes):
        observation = env.reset()
        episode_reward = 0.0
        done = False

        while not done:
            action = policy(observation)
            observation, reward, done, _ = env.step(action)
            episode_reward += reward

        episode_returns.append(episode_reward)

    returns_array = np.array(episode_returns, dtype=np.float64)
    return float(np.mean(returns_array)), float(np.std(returns_array))


def constant_schedule(value: float) -> Callable[[int], float]:
    """Create a constant schedule function.

    Examples:
        >>> schedule = constant_schedule(0.1)
        >>> schedule(0), schedule(100)
        (0.1, 0.1)
    """
    return lambda episode: value


def linear_decay_schedule(
    start: float,
    end: float,
    num_episodes: int,
) -> Callable[[int], float]:
    """Anneal a step size or exploration rate from ``start`` to ``end``.

    The value moves in a straight line over the first ``num_episodes``
    episodes and stays at ``end`` afterwards, so a run longer than the
    decay keeps learning at the final rate.

    Examples:
        >>> schedule = linear_decay_schedule(1.0, 0.0, 10)
        >>> schedule(0), schedule(5), schedule(10), schedule(20)
        (1.0, 0.5, 0.0, 0.0)
    """
    if num_episodes <= 0:
        raise ValueError(f"num_episodes must be > 0, got {num_episodes}")
    knots = (0.0, float(num_episodes))
    values = (float(start), float(end))

    def schedule(episode: int) -> float:
        return float(np.interp(episode, knots, values))

    return schedule
