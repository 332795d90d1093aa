"""Numerical settings shared by the Hull-White analytics."""

from __future__ import annotations

from dataclasses import dataclass

import os

# Far-future sentinel closing the last volatility bucket.
VOLATILITY_TIME_MAX = 1000.0

# Below this mean reversion the formulas use their kappa -> 0 limits.
SMALL_MEAN_REVERSION = 1.0e-6


@dataclass(frozen=True)
class ExerciseBoundaryConfig:
    """Configuration for the exercise boundary root search."""

    initial_lower: float = -2.0
    initial_upper: float = 2.0
    accuracy: float = 1.0e-8
    expansion_ratio: float = 1.6
    max_expansions: int = 50
    max_iterations: int = 100
    alpha_tolerance: float = 1.0e-9

    def __post_init__(self) -> None:
        if not self.initial_lower < self.initial_upper:
            raise ValueError("initial_lower must be below initial_upper")
        if self.accuracy <= 0:
            raise ValueError("accuracy must be positive")
        if self.expansion_ratio <= 0:
            raise ValueError("expansion_ratio must be positive")
        if self.max_expansions < 0:
            raise ValueError("max_expansions must be non-negative")

    @classmethod
    def from_env(cls) -> "ExerciseBoundaryConfig":
        """Build a config, honouring FICCMODELS_KAPPA_* overrides."""
        defaults = cls()
        return cls(
            accuracy=float(os.getenv("FICCMODELS_KAPPA_ACCURACY", defaults.accuracy)),
            max_expansions=int(
                os.getenv("FICCMODELS_KAPPA_MAX_EXPANSIONS", defaults.max_expansions)
            ),
        )


@dataclass(frozen=True)
class GridConfig:
    """Configuration for merging two volatility grids."""

    merge_tolerance: float = 1.0e-4

    def __post_init__(self) -> None:
        if self.merge_tolerance < 0:
            raise ValueError("merge_tolerance must be non-negative")


DEFAULT_EXERCISE_BOUNDARY_CONFIG = ExerciseBoundaryConfig()
DEFAULT_GRID_CONFIG = GridConfig()
