"""Linear action-value learning on tile-coded features.

With tile coding, the action values of an observation are a linear function
of its feature vector: Q(s, a) = W[a] . x(s). Because x(s) is binary with a
fixed number of active features, the dot product is simply the sum of the
weights of the active tiles, which is how the index-feature path computes it.

Algorithms follow the semi-gradient formulations of Sutton & Barto (2018,
Ch. 10) and are deterministic when RNG seeds are fixed.
"""

from collections.abc import Callable
from typing import Optional

import numpy as np

from rltiles.logging import get_logger

from .envs import Env
from .utils import epsilon_greedy_action, seed_rng

logger = get_logger(__name__)


def action_values(
    weights: np.ndarray,
    features: np.ndarray,
    index_features: bool = False,
) -> np.ndarray:
    """Compute the action values of one observation.

    Args:
        weights: Weight matrix, shape (n_actions, n_features).
        features: Dense feature vector of length n_features, or the active
            feature indices when ``index_features`` is True.
        index_features: Whether ``features`` holds indices.

    Returns:
        Action values, shape (n_actions,).

    Examples:
        >>> W = np.array([[1.0, 2.0, 3.0], [0.0, 1.0, 0.0]])
        >>> action_values(W, np.array([1.0, 0.0, 1.0])).tolist()
        [4.0, 0.0]
        >>> action_values(W, np.array([0, 2]), index_features=True).tolist()
        [4.0, 0.0]
    """
    if index_features:
        return weights[:, np.asarray(features, dtype=np.int64)].sum(axis=1)
    return weights @ np.asarray(features, dtype=np.float64)


def linear_q_learning(
    env: Env,
    num_episodes: int,
    alpha_schedule: Callable[[int], float],
    epsilon_schedule: Callable[[int], float],
    gamma: float,
    rng: Optional[np.random.Generator] = None,
    W0: Optional[np.ndarray] = None,
    index_features: Optional[bool] = None,
) -> np.ndarray:
    """Semi-gradient Q-learning with a linear action-value function.

    Updates the weights of the taken action along its feature vector:
    W[a] <- W[a] + alpha * (r + gamma * max_a' Q(s', a') - Q(s, a)) * x(s)

    The step size is applied as given. With tile-coded features it is common
    to pass alpha / num_active so that one update moves Q(s, a) by alpha times
    the TD error.

    Args:
        env: Environment producing feature observations, typically a
            TileCoding or IndexTileCoding wrapper.
        num_episodes: Number of episodes to run.
        alpha_schedule: Function mapping episode index -> learning rate.
        epsilon_schedule: Function mapping episode index -> epsilon.
        gamma: Discount factor in [0, 1].
        rng: Random number generator. If None, uses seed_rng(0).
        W0: Initial weights, shape (n_actions, n_features). If None, zeros.
        index_features: Whether observations are active-feature indices.
            If None, taken from ``env.index_features`` (False if absent).

    Returns:
        Learned weights, shape (n_actions, n_features).

    Examples:
        >>> from rltiles.rl.envs import MountainCar
        >>> from rltiles.rl.wrappers import IndexTileCoding
        >>> from rltiles.tilecoding import TileCoderConfig
        >>> env = IndexTileCoding(
        ...     MountainCar(max_steps=50, seed=0),
        ...     TileCoderConfig.uniform(4, 8, n_dims=2, seed=0),
        ... )
        >>> W = linear_q_learning(
        ...     env, num_episodes=2,
        ...     alpha_schedule=lambda e: 0.1,
        ...     epsilon_schedule=lambda e: 0.1,
        ...     gamma=1.0, rng=seed_rng(0)
        ... )
        >>> W.shape
        (3, 257)
    """
    if rng is None:
        rng = seed_rng(0)
    if not 0.0 <= gamma <= 1.0:
        raise ValueError(f"gamma must be in [0, 1], got {gamma}")
    if index_features is None:
        index_features = bool(getattr(env, "index_features", False))

    n_actions = env.action_space
    n_features = env.observation_spec().shape

    if W0 is None:
        W = np.zeros((n_actions, n_features), dtype=np.float64)
    else:
        W = np.asarray(W0, dtype=np.float64).copy()
        if W.shape != (n_actions, n_features):
            raise ValueError(
                f"W0 shape must be ({n_actions}, {n_features}), got {W.shape}"
            )

    for episode in range(num_episodes):
        features = env.reset()
        done = False
        steps = 0
        episode_return = 0.0

        while not done:
            epsilon = epsilon_schedule(episode)
            alpha = alpha_schedule(episode)

            q = action_values(W, features, index_features)
            action = epsilon_greedy_action(q, epsilon, rng)

            next_features, reward, done, info = env.step(action)

            # Truncation is not termination: keep bootstrapping
            if done and not info.get("truncated", False):
                max_next_q = 0.0
            else:
                max_next_q = float(np.max(action_values(W, next_features, index_features)))
            td_error = reward + gamma * max_next_q - q[action]

            if index_features:
                np.add.at(W[action], features, alpha * td_error)
            else:
                W[action] += alpha * td_error * features

            features = next_features
            steps += 1
            episode_return += reward

        logger.debug(
            "Episode %d finished after %d steps with return %.1f",
            episode,
            steps,
            episode_return,
        )

    return W


def greedy_policy_from_weights(
    weights: np.ndarray,
    index_features: bool = False,
) -> Callable[[np.ndarray], int]:
    """Create the greedy policy of a linear action-value function.

    Ties are broken deterministically by choosing the first maximising action.

    Args:
        weights: Weight matrix, shape (n_actions, n_features).
        index_features: Whether the policy receives active-feature indices.

    Returns:
        Policy function mapping a feature observation -> action.
    """
    W = np.asarray(weights, dtype=np.float64).copy()

    def policy(features: np.ndarray) -> int:
        return int(np.argmax(action_values(W, features, index_features)))

    return policy
