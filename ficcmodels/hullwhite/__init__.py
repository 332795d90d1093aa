"""Hull-White one-factor model with piecewise-constant volatility."""

from .exercise import exercise_boundary, kappa_objective, solve_kappa
from .formulas import (
    alpha2_forward_g_part,
    alpha_cash_account,
    alpha_ratio_discount_factors,
    futures_convexity_factor,
    short_rate_mean_model_part,
    short_rate_variance,
    timing_adjustment_factor,
    variance_cross_term,
    variance_cross_term_cash_account,
    variance_cross_term_constant_vol_cash_account,
)
from .grid import merge_times, parameters_common_times
from .model import HullWhiteModel
from .parameters import HullWhitePiecewiseConstantParameters

__all__ = [
    "HullWhitePiecewiseConstantParameters",
    "HullWhiteModel",
    "alpha_cash_account",
    "alpha_ratio_discount_factors",
    "alpha2_forward_g_part",
    "timing_adjustment_factor",
    "futures_convexity_factor",
    "short_rate_variance",
    "short_rate_mean_model_part",
    "variance_cross_term",
    "variance_cross_term_cash_account",
    "variance_cross_term_constant_vol_cash_account",
    "kappa_objective",
    "solve_kappa",
    "exercise_boundary",
    "merge_times",
    "parameters_common_times",
]
