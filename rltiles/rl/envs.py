"""Continuous-observation environments for tile-coding experiments.

Environments follow a minimal gym-like interface and additionally expose
observation and action specs, which is what tile-coding wrappers need to
place their tilings. All environments support RNG seeding for
reproducibility.
"""

import math
from typing import Optional, Tuple

import numpy as np

from .spec import Cardinality, Spec, SpecType
from .utils import seed_rng

MIN_POSITION = -1.2
MAX_POSITION = 0.6
MAX_SPEED = 0.07
FORCE = 0.001
GRAVITY = 0.0025


class Env:
    """Minimal environment interface with continuous observations.

    Observations are float vectors bounded by ``observation_spec()``;
    actions are small integers bounded by ``action_spec()``.
    """

    action_space: int
    observation_space: int

    def reset(self) -> np.ndarray:
        """Reset environment and return the initial observation."""
        raise NotImplementedError

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, dict]:
        """Apply action and return transition.

        Args:
            action: Action index (integer).

        Returns:
            Tuple of (observation, reward, done, info).
        """
        raise NotImplementedError

    def seed(self, seed: Optional[int]) -> None:
        """Set random seed for environment."""
        raise NotImplementedError

    def observation_spec(self) -> Spec:
        """Shape and bounds of observations."""
        raise NotImplementedError

    def action_spec(self) -> Spec:
        """Shape and bounds of actions."""
        raise NotImplementedError


class MountainCar(Env):
    """Classic control Mountain Car with three discrete actions.

    An underpowered car in a valley must rock back and forth to reach the
    goal on the right hill. Observations are (position, speed) with position
    in [-1.2, 0.6] and speed in [-0.07, 0.07].

    Actions: 0 = accelerate left, 1 = do nothing, 2 = accelerate right.

    This is a cost-to-goal task: every step yields -1 except a step that
    reaches the goal, which yields 0 and ends the episode. Episodes are also
    cut off after ``max_steps`` steps, flagged with ``info["truncated"]``.

    Args:
        goal_position: Position at or beyond which the goal is reached.
        max_steps: Step limit per episode.
        start_position: (low, high) interval of starting positions.
        start_speed: (low, high) interval of starting speeds.
        seed: Random seed for start states.

    Examples:
        >>> env = MountainCar(seed=0)
        >>> observation = env.reset()
        >>> observation.shape
        (2,)
        >>> _, reward, done, _ = env.step(2)
        >>> reward, done
        (-1.0, False)
    """

    def __init__(
        self,
        goal_position: float = 0.5,
        max_steps: int = 200,
        start_position: Tuple[float, float] = (-0.6, -0.4),
        start_speed: Tuple[float, float] = (0.0, 0.0),
        seed: Optional[int] = None,
    ):
        if not (MIN_POSITION < goal_position <= MAX_POSITION):
            raise ValueError(
                f"goal_position must be in ({MIN_POSITION}, {MAX_POSITION}], "
                f"got {goal_position}"
            )
        if max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {max_steps}")
        _check_interval("start_position", start_position, MIN_POSITION, MAX_POSITION)
        _check_interval("start_speed", start_speed, -MAX_SPEED, MAX_SPEED)

        self.goal_position = goal_position
        self.max_steps = max_steps
        self.start_position = tuple(start_position)
        self.start_speed = tuple(start_speed)
        self.force = FORCE
        self.gravity = GRAVITY
        self.rng = seed_rng(seed)

        self.state: Optional[np.ndarray] = None
        self.steps = 0
        self.done = False

        self.action_space = 3
        self.observation_space = 2

    def reset(self) -> np.ndarray:
        """Reset to a start state drawn uniformly from the start intervals."""
        position = self.rng.uniform(*self.start_position)
        speed = self.rng.uniform(*self.start_speed)
        self.state = np.array([position, speed], dtype=np.float64)
        self.steps = 0
        self.done = False
        return self.state.copy()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, dict]:
        """Take step in Mountain Car."""
        if self.state is None:
            raise RuntimeError("Environment not reset. Call reset() first.")

        if action not in (0, 1, 2):
            raise ValueError(f"action must be in [0, 1, 2], got {action}")

        # Finished episode: no transition
        if self.done:
            return self.state.copy(), 0.0, True, {}

        position, speed = self.state

        speed += (int(action) - 1) * self.force + math.cos(3 * position) * (-self.gravity)
        speed = min(max(speed, -MAX_SPEED), MAX_SPEED)

        position += speed
        position = min(max(position, MIN_POSITION), MAX_POSITION)

        # Inelastic collision with the left wall
        if position <= MIN_POSITION and speed < 0:
            speed = 0.0

        self.state = np.array([position, speed], dtype=np.float64)
        self.steps += 1

        info = {}
        at_goal = position >= self.goal_position
        reward = 0.0 if at_goal else -1.0
        if at_goal:
            self.done = True
        elif self.steps >= self.max_steps:
            self.done = True
            info["truncated"] = True

        return self.state.copy(), reward, self.done, info

    def seed(self, seed: Optional[int]) -> None:
        """Set random seed."""
        self.rng = seed_rng(seed)

    def observation_spec(self) -> Spec:
        return Spec.box(
            [MIN_POSITION, -MAX_SPEED],
            [MAX_POSITION, MAX_SPEED],
            SpecType.OBSERVATION,
        )

    def action_spec(self) -> Spec:
        return Spec.box([0.0], [2.0], SpecType.ACTION, Cardinality.DISCRETE)

    def __repr__(self) -> str:
        if self.state is None:
            return "MountainCar(not reset)"
        return f"MountainCar(position={self.state[0]:.4f}, speed={self.state[1]:.4f})"


def _check_interval(
    name: str,
    interval: Tuple[float, float],
    low: float,
    high: float,
) -> None:
    if len(interval) != 2:
        raise ValueError(f"{name} must be a (low, high) pair, got {interval}")
    start, stop = interval
    if start > stop:
        raise ValueError(f"{name} low must not exceed high, got {interval}")
    if start < low or stop > high:
        raise ValueError(f"{name} must lie within [{low}, {high}], got {interval}")
