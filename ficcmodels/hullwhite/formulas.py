"""Closed-form integrals of the Hull-White one-factor model.

All functions take :class:`HullWhitePiecewiseConstantParameters` and times
expressed as year fractions from the valuation date. Integrals over a span
``[start, end]`` are computed bucket by bucket on the local grid built by
:func:`ficcmodels.utils.intervals.iter_buckets`.

Notation
--------
kappa
    mean reversion
eta(s)
    piecewise-constant volatility
nu(s, u)
    bond volatility ``eta(s) * (1 - exp(-kappa * (u - s))) / kappa``
"""

from __future__ import annotations

import logging
import math

from ficcmodels.config import SMALL_MEAN_REVERSION
from ficcmodels.errors import InvalidArgumentError, ModelValidationError
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters
from ficcmodels.utils.intervals import accumulate, iter_buckets
from ficcmodels.utils.mathutils import (
    decay_factor,
    exp_integral,
    integral_decay_factor,
    integral_decay_factor_squared,
)

logger = logging.getLogger(__name__)

Parameters = HullWhitePiecewiseConstantParameters


def _is_small(kappa: float) -> bool:
    return kappa < SMALL_MEAN_REVERSION


def alpha2_forward_g_part(parameters: Parameters, start: float, end: float) -> float:
    """Return ``∫_start^end eta(s)^2 exp(2 kappa s) ds``.

    This is the model-dependent part shared by the forward-measure alphas.
    It is additive over adjacent spans.
    """
    two_kappa = 2.0 * parameters.mean_reversion
    return accumulate(
        parameters.volatility_times,
        parameters.volatility,
        start,
        end,
        lambda eta, lower, upper: eta * eta * exp_integral(two_kappa, lower, upper),
    )


def alpha_ratio_discount_factors(
    parameters: Parameters,
    start_expiry: float,
    end_expiry: float,
    numeraire_time: float,
    bond_maturity: float,
) -> float:
    """Volatility of the ratio ``P(., bond_maturity) / P(., numeraire_time)``.

    Parameters
    ----------
    parameters : HullWhitePiecewiseConstantParameters
        Model parameters.
    start_expiry, end_expiry : float
        Integration span of the variance.
    numeraire_time : float
        Maturity of the numeraire bond.
    bond_maturity : float
        Maturity of the bond in the numerator.

    Returns
    -------
    float
        ``(exp(-kappa t_N) - exp(-kappa t_B)) / kappa * sqrt(∫ eta^2 exp(2 kappa s) ds)``.
        The value is exactly zero when ``start_expiry == end_expiry``.
    """
    kappa = parameters.mean_reversion
    g_part = alpha2_forward_g_part(parameters, start_expiry, end_expiry)
    return exp_integral(-kappa, numeraire_time, bond_maturity) * math.sqrt(g_part)


def _bond_variance_bucket(kappa: float, u: float, lower: float, upper: float) -> float:
    """Return ``∫_lower^upper B(u - s)^2 ds``.

    With ``a = u - upper`` and ``B(a + y) = B(a) + exp(-kappa a) B(y)`` the
    integral is a sum of terms that are all non-negative when ``a >= 0``.
    """
    a = u - upper
    width = upper - lower
    b_a = decay_factor(kappa, a)
    discount = math.exp(-kappa * a)
    return (
        b_a * b_a * width
        + 2.0 * b_a * discount * integral_decay_factor(kappa, width)
        + discount * discount * integral_decay_factor_squared(kappa, width)
    )


def alpha_cash_account(
    parameters: Parameters,
    start_expiry: float,
    end_expiry: float,
    bond_maturity: float,
) -> float:
    """Volatility of a zero-coupon bond under the cash-account numeraire.

    Returns ``sqrt(∫_start^end nu(s, bond_maturity)^2 ds)``. Each bucket is
    expanded around its distance to the bond maturity, so no small-kappa
    branch is needed.

    Raises
    ------
    ModelValidationError
        If rounding leaves a negative variance.
    """
    kappa = parameters.mean_reversion
    u = bond_maturity
    radicand = accumulate(
        parameters.volatility_times,
        parameters.volatility,
        start_expiry,
        end_expiry,
        lambda eta, lower, upper: eta * eta * _bond_variance_bucket(kappa, u, lower, upper),
    )
    if radicand < 0.0:
        raise ModelValidationError(
            f"Negative cash-account variance {radicand:.6e} on "
            f"[{start_expiry}, {end_expiry}] for bond maturity {bond_maturity}"
        )
    return math.sqrt(radicand)


def timing_adjustment_factor(parameters: Parameters, s: float, t: float, v: float) -> float:
    """Timing adjustment for a payment at ``v`` of a rate fixed at ``s`` on ``[s, t]``.

    Returns ``exp(gamma)`` with
    ``gamma = (e^{-κs} - e^{-κt})(e^{-κv} - e^{-κt}) / κ² · ∫_0^s η² e^{2κu} du``.
    A payment at ``t`` gives a factor of one.
    """
    kappa = parameters.mean_reversion
    gamma = (
        exp_integral(-kappa, s, t)
        * -exp_integral(-kappa, t, v)
        * alpha2_forward_g_part(parameters, 0.0, s)
    )
    return math.exp(gamma)


def futures_convexity_factor(
    parameters: Parameters, s: float, t: float, u: float, v: float
) -> float:
    """Convexity factor of a futures on the ratio ``P(., u) / P(., v)``.

    Args:
        parameters: Model parameters.
        s: Start of the integration span.
        t: End of the integration span; must not be before ``s``.
        u: Start time of the underlying rate.
        v: End time of the underlying rate.

    Returns:
        The multiplicative factor ``exp(exponent)``; ``1.0`` when ``s == t``.

    Raises:
        InvalidArgumentError: If ``s > t``.
    """
    if s > t:
        raise InvalidArgumentError(
            f"start integration time {s} must be before end integration time {t}"
        )
    kappa = parameters.mean_reversion

    def bucket(eta: float, lower: float, upper: float) -> float:
        return (
            eta
            * eta
            * exp_integral(kappa, lower, upper)
            * (decay_factor(kappa, v - upper) + decay_factor(kappa, v - lower))
        )

    total = accumulate(parameters.volatility_times, parameters.volatility, s, t, bucket)
    return math.exp(0.5 * exp_integral(-kappa, u, v) * total)


def short_rate_variance(parameters: Parameters, start_time: float, end_time: float) -> float:
    """Variance of the short rate at ``end_time`` accumulated from ``start_time``."""
    kappa = parameters.mean_reversion
    g_part = alpha2_forward_g_part(parameters, start_time, end_time)
    return math.exp(-2.0 * kappa * end_time) * g_part


def short_rate_mean_model_part(parameters: Parameters, end_time: float) -> float:
    """Model-dependent drift of the short rate at ``end_time``.

    Returns ``∫_0^T η(s)² e^{-κ(T-s)} (1 - e^{-κ(T-s)}) / κ ds``, written as
    ``Σ η² (B(T - s_i)² - B(T - s_{i+1})²) / 2`` with ``B`` the decay factor.
    """
    kappa = parameters.mean_reversion

    def bucket(eta: float, lower: float, upper: float) -> float:
        return (
            eta
            * eta
            * (decay_factor(kappa, end_time - lower) ** 2 - decay_factor(kappa, end_time - upper) ** 2)
            / 2.0
        )

    return accumulate(parameters.volatility_times, parameters.volatility, 0.0, end_time, bucket)


def variance_cross_term(
    parameters: Parameters,
    end_integral_time: float,
    t1: float,
    t2: float,
    t3: float,
    t4: float,
) -> float:
    """Covariance ``∫_0^T (ν(s,t2) - ν(s,t1)) (ν(s,t4) - ν(s,t3)) ds``.

    The integral factors into the grid sum up to ``end_integral_time`` and a
    part depending only on ``t1`` to ``t4``.
    """
    kappa = parameters.mean_reversion
    g_part = alpha2_forward_g_part(parameters, 0.0, end_integral_time)
    return g_part * exp_integral(-kappa, t1, t2) * exp_integral(-kappa, t3, t4)


def _integral_linear_exp(rate: float, u: float, lower: float, upper: float) -> float:
    """Return ``∫_lower^upper (u - s) exp(rate s) ds`` for a non-zero ``rate``."""
    boundary = (u - upper) * math.exp(rate * upper) - (u - lower) * math.exp(rate * lower)
    return (boundary + exp_integral(rate, lower, upper)) / rate


def _integral_linear(u: float, lower: float, upper: float) -> float:
    """Return ``∫_lower^upper (u - s) ds``."""
    return ((u - lower) ** 2 - (u - upper) ** 2) / 2.0


def _cross_kernel(
    kappa1: float, u1: float, kappa2: float, u2: float, lower: float, upper: float
) -> float:
    """Return ``∫_lower^upper B1(u1 - s) B2(u2 - s) ds`` for unit volatilities."""
    small1, small2 = _is_small(kappa1), _is_small(kappa2)
    if small1 and small2:
        def antiderivative(x: float) -> float:
            return u1 * u2 * x - (u1 + u2) * x * x / 2.0 + x ** 3 / 3.0

        return antiderivative(upper) - antiderivative(lower)
    if small1 or small2:
        # (u_s - s) from the small side times B(u_k - s) from the other one.
        u_small, kappa, u = (u1, kappa2, u2) if small1 else (u2, kappa1, u1)
        return (
            _integral_linear(u_small, lower, upper)
            - math.exp(-kappa * u) * _integral_linear_exp(kappa, u_small, lower, upper)
        ) / kappa
    return (
        (upper - lower)
        - math.exp(-kappa1 * u1) * exp_integral(kappa1, lower, upper)
        - math.exp(-kappa2 * u2) * exp_integral(kappa2, lower, upper)
        + math.exp(-kappa1 * u1 - kappa2 * u2) * exp_integral(kappa1 + kappa2, lower, upper)
    ) / (kappa1 * kappa2)


def _check_same_grid(parameters1: Parameters, parameters2: Parameters, strict: bool) -> None:
    if parameters1.bucket_count != parameters2.bucket_count:
        raise ModelValidationError(
            f"Volatility grids differ in size: {parameters1.bucket_count} "
            f"and {parameters2.bucket_count} buckets"
        )
    if strict and parameters1.volatility_times != parameters2.volatility_times:
        raise ModelValidationError(
            "Both models must share the same volatility_times; "
            "use parameters_common_times first"
        )


def variance_cross_term_cash_account(
    parameters1: Parameters,
    parameters2: Parameters,
    start: float,
    end: float,
    u1: float,
    u2: float,
    check_grid: bool = False,
) -> float:
    """Covariance ``∫_start^end ν1(s, u1) ν2(s, u2) ds`` between two models.

    Both models must share the same volatility grid; the grid of the first
    one is used to slice the span and the same bucket index selects the
    volatility of the second one. With ``check_grid`` the full grids are
    compared and a mismatch raises :class:`ModelValidationError`.
    """
    _check_same_grid(parameters1, parameters2, check_grid)
    kappa1, kappa2 = parameters1.mean_reversion, parameters2.mean_reversion
    total = 0.0
    for index, lower, upper in iter_buckets(parameters1.volatility_times, start, end):
        eta12 = parameters1.volatility[index] * parameters2.volatility[index]
        total += eta12 * _cross_kernel(kappa1, u1, kappa2, u2, lower, upper)
    return total


def variance_cross_term_constant_vol_cash_account(
    parameters: Parameters, start: float, end: float, u1: float
) -> float:
    """Covariance ``∫_start^end ν(s, u1) ds`` against a unit constant-volatility leg."""
    kappa = parameters.mean_reversion

    if _is_small(kappa):
        def bucket(eta: float, lower: float, upper: float) -> float:
            return eta * _integral_linear(u1, lower, upper)
    else:
        def bucket(eta: float, lower: float, upper: float) -> float:
            return eta * (
                (upper - lower) - math.exp(-kappa * u1) * exp_integral(kappa, lower, upper)
            ) / kappa

    return accumulate(parameters.volatility_times, parameters.volatility, start, end, bucket)
