"""Compounded overnight futures in the Hull-White model.

The futures rate compounds the overnight fixings between the period start
and end; its price is ``1 - rate`` and the convexity adjustment comes from
the daily margining (one futures convexity factor per overnight period).
"""

from __future__ import annotations

from typing import List, Sequence

import logging
import math

from ficcmodels.errors import InvalidArgumentError
from ficcmodels.hullwhite.formulas import futures_convexity_factor
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)


def overnight_futures_gammas(
    parameters: HullWhitePiecewiseConstantParameters,
    fixing_times: Sequence[float],
) -> List[float]:
    """Convexity factors of the overnight periods.

    ``fixing_times`` are the model times of the overnight dates from the
    period start to the period end (both included).
    """
    if len(fixing_times) < 2:
        raise InvalidArgumentError("At least two overnight dates are required")
    times = [0.0, *fixing_times]
    n = len(fixing_times)
    return [
        futures_convexity_factor(parameters, times[i], times[i + 1], times[i + 1], times[n])
        for i in range(n - 1)
    ]


def _check_accrual(accrual: float) -> None:
    if accrual <= 0.0:
        raise InvalidArgumentError(f"accrual must be positive, got {accrual}")


def overnight_futures_price(
    parameters: HullWhitePiecewiseConstantParameters,
    fixing_times: Sequence[float],
    discount_factor_start: float,
    discount_factor_end: float,
    accrual: float,
) -> float:
    """Futures price ``1 - (P(Ts) / P(Te) Πγ - 1) / δ``."""
    _check_accrual(accrual)
    product = math.prod(overnight_futures_gammas(parameters, fixing_times))
    return 1.0 - (discount_factor_start / discount_factor_end * product - 1.0) / accrual


def overnight_futures_convexity_adjustment(
    parameters: HullWhitePiecewiseConstantParameters,
    fixing_times: Sequence[float],
    discount_factor_start: float,
    discount_factor_end: float,
    accrual: float,
) -> float:
    """Difference between the futures rate and the forward rate."""
    _check_accrual(accrual)
    product = math.prod(overnight_futures_gammas(parameters, fixing_times))
    return discount_factor_start / discount_factor_end * (product - 1.0) / accrual
