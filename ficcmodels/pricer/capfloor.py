"""Ibor caplets and floorlets in the Hull-White model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import logging
import math

from scipy.stats import norm

from ficcmodels.errors import InvalidArgumentError
from ficcmodels.hullwhite.formulas import alpha_ratio_discount_factors
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)


def caplet_present_value(
    parameters: HullWhitePiecewiseConstantParameters,
    expiry_time: float,
    start_time: float,
    end_time: float,
    payment_time: float,
    forward_rate: float,
    strike: float,
    accrual_index: float,
    accrual_payment: float,
    discount_factor_payment: float,
    notional: float = 1.0,
    is_call: bool = True,
) -> float:
    """
    Present value of a caplet (``is_call``) or floorlet.

    Parameters
    ----------
    expiry_time : float
        Fixing time of the Ibor rate; negative when already fixed.
    start_time, end_time : float
        Accrual period of the Ibor rate.
    payment_time : float
        Payment time of the coupon, possibly different from ``end_time``.
    forward_rate : float
        Forward Ibor rate for the period.
    strike : float
        Cap or floor rate.
    accrual_index, accrual_payment : float
        Year fractions of the Ibor index and of the coupon.
    discount_factor_payment : float
        Discount factor to the payment time.
    notional : float
        Coupon notional.

    Returns
    -------
    float
        Present value. A degenerate zero volatility gives the intrinsic value.
    """
    if accrual_index <= 0.0:
        raise InvalidArgumentError(f"accrual_index must be positive, got {accrual_index}")
    if expiry_time < 0.0:
        return 0.0
    investment_factor = 1.0 + accrual_index * forward_rate
    one_plus_delta_k = 1.0 + accrual_index * strike
    alpha0 = alpha_ratio_discount_factors(parameters, 0.0, expiry_time, start_time, end_time)
    alpha1 = alpha_ratio_discount_factors(parameters, 0.0, expiry_time, payment_time, end_time)
    scale = discount_factor_payment * accrual_payment / accrual_index * notional

    if alpha0 == 0.0:
        intrinsic = investment_factor - one_plus_delta_k
        payoff = max(intrinsic, 0.0) if is_call else max(-intrinsic, 0.0)
        return payoff * scale

    kappa = (math.log(investment_factor / one_plus_delta_k) - 0.5 * alpha0 * alpha0) / alpha0
    convexity = math.exp(alpha0 * alpha1)
    if is_call:
        pv = investment_factor * norm.cdf(kappa + alpha0 + alpha1) * convexity - (
            one_plus_delta_k * norm.cdf(kappa + alpha1)
        )
    else:
        pv = one_plus_delta_k * norm.cdf(-kappa - alpha1) - (
            investment_factor * norm.cdf(-kappa - alpha0 - alpha1) * convexity
        )
    logger.debug("Caplet kappa=%.8f alpha0=%.8f alpha1=%.8f", kappa, alpha0, alpha1)
    return float(pv) * scale


@dataclass(frozen=True)
class CapletPeriod:
    """One caplet or floorlet of a cap/floor leg, in model times."""

    expiry_time: float
    start_time: float
    end_time: float
    payment_time: float
    forward_rate: float
    strike: float
    accrual_index: float
    accrual_payment: float
    discount_factor_payment: float
    notional: float = 1.0


def cap_floor_leg_present_value(
    parameters: HullWhitePiecewiseConstantParameters,
    periods: Sequence[CapletPeriod],
    is_cap: bool = True,
) -> float:
    """Present value of a cap (``is_cap``) or floor leg as the sum of its periods."""
    values = [
        caplet_present_value(
            parameters,
            period.expiry_time,
            period.start_time,
            period.end_time,
            period.payment_time,
            period.forward_rate,
            period.strike,
            period.accrual_index,
            period.accrual_payment,
            period.discount_factor_payment,
            period.notional,
            is_cap,
        )
        for period in periods
    ]
    logger.debug("Priced %s-period %s leg", len(values), "cap" if is_cap else "floor")
    return math.fsum(values)
