"""Linear Q-learning on Mountain Car with tile-coded observations.

This example tiles the (position, speed) observation with five coarse 5x5
tilings and five coarser 3x3 tilings, each with its own random offset, and
trains a linear action-value function with semi-gradient Q-learning
whose step size is annealed linearly over the run.
Weights start at zero, which is optimistic for a task that costs -1 per
step, so a purely greedy behaviour policy still explores.
"""

from __future__ import annotations

import logging

import rltiles as rt
from rltiles.rl import (
    constant_schedule,
    evaluate_policy,
    greedy_policy_from_weights,
    linear_decay_schedule,
    linear_q_learning,
    seed_rng,
)


def main() -> None:
    """Train on Mountain Car and report the greedy policy's return."""
    rt.configure_logging(level=logging.INFO)

    # Configuration
    num_episodes = 50
    max_steps = 200
    config = rt.TileCoderConfig.stacked(
        [
            rt.TileCoderConfig.uniform(5, 5, n_dims=2),
            rt.TileCoderConfig.uniform(5, 3, n_dims=2),
        ],
        seed=0,
        include_bias=True,
    )

    env = rt.IndexTileCoding(rt.MountainCar(max_steps=max_steps, seed=0), config)
    print(f"Features per observation: {env.coder.vec_length} ({env.coder.num_active} active)")

    # Step size per active feature: one update first moves Q by 0.1 * TD error,
    # annealed to 0.02 * TD error by the last episode
    step_sizes = linear_decay_schedule(
        0.1 / env.coder.num_active,
        0.02 / env.coder.num_active,
        num_episodes,
    )

    weights = linear_q_learning(
        env,
        num_episodes=num_episodes,
        alpha_schedule=step_sizes,
        epsilon_schedule=constant_schedule(0.0),
        gamma=1.0,
        rng=seed_rng(0),
    )

    policy = greedy_policy_from_weights(weights, index_features=True)
    mean_return, std_return = evaluate_policy(env, policy, num_episodes=5)

    print(f"Trained for {num_episodes} episodes")
    print(f"Greedy policy average return: {mean_return:.1f} +/- {std_return:.1f}")


if __name__ == "__main__":
    main()
