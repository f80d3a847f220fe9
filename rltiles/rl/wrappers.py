"""Environment wrappers that tile code observations.

The wrappers are themselves environments: agents interact with them exactly
as with the wrapped environment, but every observation they see has been
passed through a TileCoder placed over the wrapped environment's
observation bounds.
"""

from typing import Optional, Tuple

import numpy as np

from rltiles.logging import get_logger
from rltiles.tilecoding.config import TileCoderConfig, create_tile_coder
from rltiles.tilecoding.core import TileCoder

from .envs import Env
from .spec import Cardinality, Spec, SpecType

logger = get_logger(__name__)


class _TileCodingBase(Env):
    """Shared plumbing for the tile-coding wrappers."""

    index_features = False

    def __init__(self, env: Env, config: TileCoderConfig):
        obs_spec = env.observation_spec()
        self.env = env
        self.config = config
        self.coder: TileCoder = create_tile_coder(
            config, obs_spec.lower_bound, obs_spec.upper_bound
        )
        self.action_space = env.action_space
        self.observation_space = self.coder.vec_length
        logger.info("Wrapped %r with %r", env, self.coder)

    def _transform(self, observation: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def reset(self) -> np.ndarray:
        """Reset the wrapped environment and tile code its first observation."""
        return self._transform(self.env.reset())

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, dict]:
        """Step the wrapped environment and tile code the next observation."""
        observation, reward, done, info = self.env.step(action)
        return self._transform(observation), reward, done, info

    def seed(self, seed: Optional[int]) -> None:
        """Seed the wrapped environment. Tiling offsets are not re-sampled."""
        self.env.seed(seed)

    def observation_spec(self) -> Spec:
        """Tile-coded features: vec_length components, each in [0, 1]."""
        length = self.coder.vec_length
        return Spec(
            shape=length,
            type=SpecType.OBSERVATION,
            lower_bound=np.zeros(length),
            upper_bound=np.ones(length),
            cardinality=Cardinality.CONTINUOUS,
        )

    def action_spec(self) -> Spec:
        return self.env.action_spec()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.env!r})"


class TileCoding(_TileCodingBase):
    """Wrap an environment so observations are dense tile-coded vectors.

    Args:
        env: Environment with a bounded observation spec.
        config: Tiling description; bounds come from the environment.

    Raises:
        ValueError: If the config does not fit the observation spec.

    Examples:
        >>> from rltiles.rl.envs import MountainCar
        >>> config = TileCoderConfig.uniform(4, 8, n_dims=2, seed=1)
        >>> env = TileCoding(MountainCar(seed=0), config)
        >>> float(env.reset().sum())
        5.0
    """

    def _transform(self, observation: np.ndarray) -> np.ndarray:
        return self.coder.encode(observation)


class IndexTileCoding(_TileCodingBase):
    """Wrap an environment so observations are the active tile indices.

    If the dense tile-coded observation is [1 0 1 0 0 0 1], this wrapper
    returns [0 2 6] instead. The observation spec still describes the
    dense vector, since that is the space linear learners size their
    weights for.

    Args:
        env: Environment with a bounded observation spec.
        config: Tiling description; bounds come from the environment.
    """

    index_features = True

    def _transform(self, observation: np.ndarray) -> np.ndarray:
        return self.coder.encode_indices(observation)
