"""Small numerical helpers shared by the Hull-White formulas."""

from __future__ import annotations

from typing import Sequence

import math


def exp_integral(rate: float, lower: float, upper: float) -> float:
    """Return the integral of ``exp(rate * s)`` over ``[lower, upper]``.

    Written with ``expm1`` so that it stays accurate when ``rate`` is close
    to zero; the ``rate == 0`` limit is the interval length.
    """
    if rate == 0.0:
        return upper - lower
    return math.exp(rate * lower) * math.expm1(rate * (upper - lower)) / rate


def decay_factor(rate: float, tau: float) -> float:
    """Return ``(1 - exp(-rate * tau)) / rate``, the Hull-White ``B`` function."""
    if rate == 0.0:
        return tau
    return -math.expm1(-rate * tau) / rate


_SERIES_LIMIT = 0.5
_SERIES_TERMS = 25


def integral_decay_factor(rate: float, tau: float) -> float:
    """Return ``∫_0^tau B(y) dy`` with ``B`` the :func:`decay_factor`.

    Small ``rate * tau`` uses the Taylor series of
    ``(x - 1 + exp(-x)) / x**2``, whose closed form cancels near zero.
    """
    x = rate * tau
    if abs(x) < _SERIES_LIMIT:
        total = 0.0
        term = 0.5
        for n in range(2, 2 + _SERIES_TERMS):
            total += term
            term *= -x / (n + 1)
        return tau * tau * total
    return (x + math.expm1(-x)) / (rate * rate)


def integral_decay_factor_squared(rate: float, tau: float) -> float:
    """Return ``∫_0^tau B(y)**2 dy`` with ``B`` the :func:`decay_factor`.

    The closed form ``(x + 2 expm1(-x) - expm1(-2x) / 2) / rate**3`` is
    replaced by its series in ``x = rate * tau`` near zero.
    """
    x = rate * tau
    if abs(x) < _SERIES_LIMIT:
        total = 0.0
        term = 1.0 / 6.0
        for n in range(3, 3 + _SERIES_TERMS):
            total += (2.0 ** n - 4.0) * term
            term *= -x / (n + 1)
        return 0.5 * tau ** 3 * total
    return (x + 2.0 * math.expm1(-x) - 0.5 * math.expm1(-2.0 * x)) / rate ** 3


def spread(values: Sequence[float]) -> float:
    """Return ``max(values) - min(values)``."""
    if not values:
        raise ValueError("values must not be empty")
    return max(values) - min(values)
