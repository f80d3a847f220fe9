"""Environment specifications.

A Spec tells consumers the type, shape and bounds of an action,
observation, discount or reward. Tile-coding wrappers read the observation
spec of the environment they wrap to place their tilings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class SpecType(Enum):
    """What a Spec describes."""

    ACTION = "action"
    OBSERVATION = "observation"
    DISCOUNT = "discount"
    REWARD = "reward"


class Cardinality(Enum):
    """Whether the described values are continuous or discrete."""

    CONTINUOUS = "continuous"
    DISCRETE = "discrete"


@dataclass(frozen=True, eq=False)
class Spec:
    """
    Specification of one kind of environment quantity.

    Args:
        shape: Number of components.
        type: What the spec describes.
        lower_bound: Per-component lower bound, shape (shape,).
        upper_bound: Per-component upper bound, shape (shape,).
        cardinality: Continuous or discrete values.

    Examples:
        >>> spec = Spec.box([0.0, -1.0], [1.0, 1.0], SpecType.OBSERVATION)
        >>> spec.shape
        2
    """

    shape: int
    type: SpecType
    lower_bound: np.ndarray
    upper_bound: np.ndarray
    cardinality: Cardinality = Cardinality.CONTINUOUS

    def __post_init__(self) -> None:
        lower = np.array(self.lower_bound, dtype=np.float64)
        upper = np.array(self.upper_bound, dtype=np.float64)
        if lower.shape != (self.shape,):
            raise ValueError(
                f"shape {self.shape} must match lower bound length {lower.size}"
            )
        if upper.shape != (self.shape,):
            raise ValueError(
                f"shape {self.shape} must match upper bound length {upper.size}"
            )
        lower.flags.writeable = False
        upper.flags.writeable = False
        object.__setattr__(self, "lower_bound", lower)
        object.__setattr__(self, "upper_bound", upper)

    @classmethod
    def box(
        cls,
        lower_bound,
        upper_bound,
        type: SpecType,
        cardinality: Cardinality = Cardinality.CONTINUOUS,
    ) -> "Spec":
        """Build a spec whose shape is inferred from the bounds."""
        lower = np.atleast_1d(np.asarray(lower_bound, dtype=np.float64))
        return cls(
            shape=int(lower.shape[0]),
            type=type,
            lower_bound=lower,
            upper_bound=np.atleast_1d(np.asarray(upper_bound, dtype=np.float64)),
            cardinality=cardinality,
        )
