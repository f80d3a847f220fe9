"""Tests for RL utility functions."""

import numpy as np
import pytest

from rltiles.rl.envs import MountainCar
from rltiles.rl.utils import (
    constant_schedule,
    epsilon_greedy_action,
    evaluate_policy,
    linear_decay_schedule,
    seed_rng,
)


class TestSeedRNG:
    """Tests for RNG seeding."""

    def test_seed_rng(self):
        """Test that the same seed gives the same sequence."""
        assert seed_rng(42).integers(100) == seed_rng(42).integers(100)

    def test_default_seed(self):
        """Test that None means seed 0."""
        assert seed_rng(None).random() == seed_rng(0).random()


class TestEpsilonGreedy:
    """Tests for epsilon-greedy action selection."""

    def test_greedy_action(self):
        """Test that epsilon 0 picks the argmax."""
        rng = seed_rng(0)
        assert epsilon_greedy_action(np.array([-3.0, -1.0, -2.0]), 0.0, rng) == 1

    def test_random_action(self):
        """Test that epsilon 1 eventually picks every action."""
        rng = seed_rng(0)
        actions = {epsilon_greedy_action(np.zeros(3), 1.0, rng) for _ in range(100)}
        assert actions == {0, 1, 2}

    def test_tie_breaking(self):
        """Test that ties go to the first action."""
        rng = seed_rng(0)
        assert epsilon_greedy_action(np.array([-1.0, -1.0, -1.0]), 0.0, rng) == 0

    @pytest.mark.parametrize("epsilon", [-0.1, 1.1])
    def test_invalid_epsilon(self, epsilon):
        """Test that epsilon must lie in [0, 1]."""
        with pytest.raises(ValueError, match="epsilon"):
            epsilon_greedy_action(np.zeros(3), epsilon, seed_rng(0))


class TestEvaluatePolicy:
    """Tests for policy evaluation."""

    def test_evaluate_policy(self):
        """Test the returns of a policy that never reaches the goal."""
        env = MountainCar(max_steps=25, seed=0)
        mean_return, std_return = evaluate_policy(env, lambda obs: 1, num_episodes=4)
        assert mean_return == -25.0
        assert std_return == 0.0

    def test_invalid_num_episodes(self):
        """Test that at least one episode is required."""
        with pytest.raises(ValueError, match="num_episodes"):
            evaluate_policy(MountainCar(), lambda obs: 1, num_episodes=0)


class TestSchedules:
    """Tests for step-size and exploration schedules."""

    def test_constant_schedule(self):
        """Test that the value never changes."""
        schedule = constant_schedule(0.25)
        assert schedule(0) == schedule(1000) == 0.25

    def test_linear_decay_schedule(self):
        """Test linear annealing across episodes and the final plateau."""
        schedule = linear_decay_schedule(1.0, 0.1, 10)
        assert schedule(0) == 1.0
        assert schedule(5) == pytest.approx(0.55)
        assert schedule(10) == 0.1
        assert schedule(50) == 0.1

    def test_linear_decay_invalid(self):
        """Test that the decay needs a positive length."""
        with pytest.raises(ValueError, match="num_episodes"):
            linear_decay_schedule(1.0, 0.0, 0)
