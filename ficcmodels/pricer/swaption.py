"""Physically settled European swaptions in the Hull-White model.

The underlying swap is described by its cash-flow equivalents: times
``t_0 < t_1 < ... < t_n`` (``t_0`` the swap start) and the discounted amounts
``cf_i`` paid at those times, ``cf_0`` being the notional exchange.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import logging

import numpy as np
from scipy.stats import norm

from ficcmodels.config import ExerciseBoundaryConfig
from ficcmodels.errors import InvalidArgumentError
from ficcmodels.hullwhite.exercise import exercise_boundary
from ficcmodels.hullwhite.formulas import alpha_ratio_discount_factors
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)


def swaption_alphas(
    parameters: HullWhitePiecewiseConstantParameters,
    expiry_time: float,
    cash_flow_times: Sequence[float],
) -> List[float]:
    """Volatilities of ``P(., t_i) / P(., t_0)`` up to expiry; the first one is zero."""
    if len(cash_flow_times) == 0:
        raise InvalidArgumentError("At least one cash-flow time is required")
    numeraire_time = cash_flow_times[0]
    return [
        alpha_ratio_discount_factors(parameters, 0.0, expiry_time, numeraire_time, t)
        for t in cash_flow_times
    ]


def present_value_physical(
    parameters: HullWhitePiecewiseConstantParameters,
    expiry_time: float,
    cash_flow_times: Sequence[float],
    discounted_cash_flows: Sequence[float],
    *,
    payer_fixed: bool,
    long: bool = True,
    config: Optional[ExerciseBoundaryConfig] = None,
) -> float:
    """Present value of a physical swaption from its cash-flow equivalents.

    Args:
        parameters: Hull-White parameters.
        expiry_time: Option expiry as a model time; negative if already expired.
        cash_flow_times: Payment times of the cash-flow equivalents.
        discounted_cash_flows: Cash-flow equivalents multiplied by their discount factors.
        payer_fixed: ``True`` when the option holder pays the fixed leg.
        long: Long or short the option.
        config: Exercise boundary search settings.

    Returns:
        ``Σ cf_i N(ω (κ* + α_i))`` with ``ω = -1`` for a payer swaption, signed
        by the long/short flag.
    """
    if len(cash_flow_times) != len(discounted_cash_flows):
        raise InvalidArgumentError(
            f"Cash-flow times and amounts must have the same length: "
            f"{len(cash_flow_times)} vs {len(discounted_cash_flows)}"
        )
    if expiry_time < 0.0:
        logger.debug("Swaption expired at %s, value is zero", expiry_time)
        return 0.0
    alphas = swaption_alphas(parameters, expiry_time, cash_flow_times)
    omega = -1.0 if payer_fixed else 1.0
    kappa = exercise_boundary(discounted_cash_flows, alphas, omega, config)
    cfs = np.asarray(discounted_cash_flows, dtype=float)
    pv = float(np.sum(cfs * norm.cdf(omega * (kappa + np.asarray(alphas)))))
    return pv if long else -pv
