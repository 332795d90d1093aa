"""Root-finding utilities (geometric bracketing followed by Ridder's method)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import logging
import math

from scipy import optimize

from ficcmodels.errors import NoRootBracketError, RootFindingError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


def bracket_root(
    func: Func,
    lower: float,
    upper: float,
    *,
    expansion: float = 1.6,
    max_iter: int = 50,
) -> Tuple[float, float]:
    """Expand ``[lower, upper]`` geometrically until ``func`` changes sign.

    The end point with the smaller absolute function value is moved away
    from the other one by ``expansion`` times the current width.

    Raises
    ------
    NoRootBracketError
        If no sign change is found after ``max_iter`` expansions.
    """
    if not lower < upper:
        raise ValueError("lower must be below upper")
    a, b = lower, upper
    f_a = func(a)
    f_b = func(b)
    for iteration in range(max_iter + 1):
        if f_a * f_b <= 0.0:
            logger.debug(
                "Bracket found after %s expansions: [%s, %s]", iteration, a, b
            )
            return a, b
        if iteration == max_iter:
            break
        if abs(f_a) < abs(f_b):
            a += expansion * (a - b)
            f_a = func(a)
        else:
            b += expansion * (b - a)
            f_b = func(b)
    raise NoRootBracketError(
        f"Failed to bracket the root starting from [{lower}, {upper}]: "
        f"f({a:.6g})={f_a:.6e}, f({b:.6g})={f_b:.6e} after {max_iter} expansions"
    )


def ridder(
    func: Func,
    lower: float,
    upper: float,
    *,
    tol: float = 1e-8,
    max_iter: int = 100,
) -> RootResult:
    """Refine a bracketed root with Ridder's method."""
    f_lower = func(lower)
    f_upper = func(upper)
    if f_lower == 0.0:
        return RootResult(lower, 0, True, "ridder")
    if f_upper == 0.0:
        return RootResult(upper, 0, True, "ridder")
    if f_lower * f_upper > 0:
        raise NoRootBracketError(
            f"Ridder's method requires a sign change in the bracket: "
            f"f({lower:.6g})={f_lower:.6e}, f({upper:.6g})={f_upper:.6e}"
        )

    root, info = optimize.ridder(
        func, lower, upper, xtol=tol, maxiter=max_iter, full_output=True, disp=False
    )
    logger.debug(
        "Ridder: root=%s iterations=%s converged=%s", root, info.iterations, info.converged
    )
    if not info.converged or not math.isfinite(root):
        raise RootFindingError(
            f"Ridder's method failed to converge within {max_iter} iterations "
            f"on [{lower}, {upper}] ({info.flag})"
        )
    return RootResult(float(root), int(info.iterations), True, "ridder")


def find_root(
    func: Func,
    lower: float,
    upper: float,
    *,
    tol: float = 1e-8,
    expansion: float = 1.6,
    max_expansions: int = 50,
    max_iter: int = 100,
) -> RootResult:
    """Bracket a root starting from ``[lower, upper]`` and refine it."""
    a, b = bracket_root(func, lower, upper, expansion=expansion, max_iter=max_expansions)
    return ridder(func, a, b, tol=tol, max_iter=max_iter)
