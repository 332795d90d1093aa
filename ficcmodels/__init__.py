"""ficcmodels: Hull-White one-factor analytics with piecewise-constant volatility."""

from .config import ExerciseBoundaryConfig, GridConfig
from .errors import (
    FiccModelsError,
    InvalidArgumentError,
    ModelValidationError,
    NoRootBracketError,
    OutOfRangeError,
    PricingError,
    RootFindingError,
)
from .hullwhite import (
    HullWhiteModel,
    HullWhitePiecewiseConstantParameters,
    exercise_boundary,
    parameters_common_times,
    solve_kappa,
)

__version__ = "0.1.0"

__all__ = [
    "ExerciseBoundaryConfig",
    "GridConfig",
    "FiccModelsError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ModelValidationError",
    "RootFindingError",
    "NoRootBracketError",
    "PricingError",
    "HullWhitePiecewiseConstantParameters",
    "HullWhiteModel",
    "solve_kappa",
    "exercise_boundary",
    "parameters_common_times",
]
