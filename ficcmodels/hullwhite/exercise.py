"""Exercise boundary of a physically settled swaption in the Hull-White model.

The swaption is exercised when the standardised Gaussian factor is above (or
below) ``kappa*``, the root of

    f(x) = Σ cf_i exp(-½ α_i² - (α_i - α_0) x)

where ``cf_i`` are the discounted cash-flow equivalents of the underlying swap
and ``α_i`` the volatilities of the discount factor ratios ``P(., t_i) / P(., t_0)``.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import logging
import math

import numpy as np

from ficcmodels.config import DEFAULT_EXERCISE_BOUNDARY_CONFIG, ExerciseBoundaryConfig
from ficcmodels.errors import InvalidArgumentError
from ficcmodels.utils.mathutils import spread
from ficcmodels.utils.rootfinding import find_root

logger = logging.getLogger(__name__)


def _check_inputs(discounted_cash_flows: Sequence[float], alphas: Sequence[float]) -> None:
    if len(discounted_cash_flows) == 0:
        raise InvalidArgumentError("At least one cash flow is required")
    if len(discounted_cash_flows) != len(alphas):
        raise InvalidArgumentError(
            f"Cash flows and alphas must have the same length: "
            f"{len(discounted_cash_flows)} vs {len(alphas)}"
        )


def kappa_objective(
    discounted_cash_flows: Sequence[float], alphas: Sequence[float]
) -> Callable[[float], float]:
    """Return the function whose root is the exercise boundary."""
    _check_inputs(discounted_cash_flows, alphas)
    cfs = np.asarray(discounted_cash_flows, dtype=float)
    alpha = np.asarray(alphas, dtype=float)
    exp_alpha2 = np.exp(-0.5 * alpha * alpha)
    shift = alpha - alpha[0]

    def objective(x: float) -> float:
        return float(np.sum(cfs * exp_alpha2 * np.exp(-shift * x)))

    return objective


def solve_kappa(
    discounted_cash_flows: Sequence[float],
    alphas: Sequence[float],
    config: Optional[ExerciseBoundaryConfig] = None,
) -> float:
    """Solve for the exercise boundary ``kappa*``.

    The root is bracketed by geometric expansion from
    ``[config.initial_lower, config.initial_upper]`` and refined with Ridder's
    method to ``config.accuracy``.

    Raises
    ------
    InvalidArgumentError
        If the inputs are empty or of different lengths.
    NoRootBracketError
        If the objective keeps the same sign after all expansions.
    RootFindingError
        If Ridder's method does not converge.
    """
    config = config or DEFAULT_EXERCISE_BOUNDARY_CONFIG
    objective = kappa_objective(discounted_cash_flows, alphas)
    result = find_root(
        objective,
        config.initial_lower,
        config.initial_upper,
        tol=config.accuracy,
        expansion=config.expansion_ratio,
        max_expansions=config.max_expansions,
        max_iter=config.max_iterations,
    )
    logger.debug(
        "Exercise boundary %.10f found in %s iterations", result.root, result.iterations
    )
    return result.root


def exercise_boundary(
    discounted_cash_flows: Sequence[float],
    alphas: Sequence[float],
    omega: float = 1.0,
    config: Optional[ExerciseBoundaryConfig] = None,
) -> float:
    """Exercise boundary with the degenerate flat-alpha case handled.

    When all alphas coincide the objective does not depend on ``x``: the
    option is then always or never exercised and the boundary is ``+inf``
    if ``omega * Σ cf > 0`` and ``-inf`` otherwise.
    """
    config = config or DEFAULT_EXERCISE_BOUNDARY_CONFIG
    _check_inputs(discounted_cash_flows, alphas)
    if spread(list(alphas)) <= config.alpha_tolerance:
        total = math.fsum(discounted_cash_flows)
        logger.debug("Flat alphas, exercise decided by the sign of %s", omega * total)
        return math.inf if omega * total > 0.0 else -math.inf
    return solve_kappa(discounted_cash_flows, alphas, config)
