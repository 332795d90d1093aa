"""Locating times on a piecewise-constant volatility grid.

The grid is a strictly increasing sequence of breakpoints ``times`` with one
volatility per bucket ``(times[i], times[i + 1]]``. Every integral over a span
``[start, end]`` is decomposed on the local grid

    [start, times[i_start], ..., times[i_end - 1], end]

and the leading partial bucket uses the volatility of the bucket that
contains ``start``.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Sequence, Tuple

import bisect
import math

from ficcmodels.errors import InvalidArgumentError, OutOfRangeError

BucketTerm = Callable[[float, float, float], float]


def locate_interval(times: Sequence[float], t: float) -> int:
    """Return the index ``i`` such that ``times[i - 1] <= t < times[i]``.

    A time equal to a breakpoint belongs to the bucket starting at that
    breakpoint. The last breakpoint is attached to the last bucket so the
    returned index is always a valid upper index of a bucket.

    Raises
    ------
    OutOfRangeError
        If ``t`` is not finite or lies outside ``[times[0], times[-1]]``.
    """
    lower, upper = times[0], times[-1]
    if not math.isfinite(t) or t < lower or t > upper:
        raise OutOfRangeError(t, lower, upper)
    return min(bisect.bisect_right(times, t), len(times) - 1)


def _local_grid(
    times: Sequence[float], start: float, end: float
) -> Tuple[int, List[float]]:
    if start > end:
        raise InvalidArgumentError(
            f"start ({start!r}) must not be after end ({end!r})"
        )
    index_start = locate_interval(times, start)
    index_end = locate_interval(times, end)
    return index_start, [start, *times[index_start:index_end], end]


def build_local_grid(times: Sequence[float], start: float, end: float) -> List[float]:
    """Return the breakpoints of ``[start, end]`` refined by the grid ``times``."""
    return _local_grid(times, start, end)[1]


def iter_buckets(
    times: Sequence[float], start: float, end: float
) -> Iterator[Tuple[int, float, float]]:
    """Yield ``(volatility_index, lower, upper)`` for each piece of ``[start, end]``."""
    index_start, grid = _local_grid(times, start, end)
    for position in range(len(grid) - 1):
        yield position + index_start - 1, grid[position], grid[position + 1]


def accumulate(
    times: Sequence[float],
    volatility: Sequence[float],
    start: float,
    end: float,
    term: BucketTerm,
) -> float:
    """Sum ``term(eta, lower, upper)`` over the constant-volatility pieces of a span."""
    total = 0.0
    for index, lower, upper in iter_buckets(times, start, end):
        total += term(volatility[index], lower, upper)
    return total
