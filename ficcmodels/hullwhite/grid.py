"""Reconciling the volatility grids of two Hull-White parameter sets."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import logging

import numpy as np

from ficcmodels.config import DEFAULT_GRID_CONFIG
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)

Parameters = HullWhitePiecewiseConstantParameters


def merge_times(
    times1: Sequence[float], times2: Sequence[float], tolerance: float
) -> List[float]:
    """Sorted union of two grids with near-coincident points merged.

    A point closer than ``tolerance`` to the previously kept point is
    dropped. ``0.0`` is always kept and the largest time of both grids is
    always the last point.
    """
    union = np.union1d(np.asarray(times1, dtype=float), np.asarray(times2, dtype=float))
    merged = [float(union[0])]
    for t in union[1:]:
        if t - merged[-1] >= tolerance:
            merged.append(float(t))
    last = float(union[-1])
    if merged[-1] != last:
        # The far-future sentinel replaces a point that would shadow it.
        if len(merged) > 1:
            merged[-1] = last
        else:
            merged.append(last)
    return merged


def _resample(source: Parameters, times: Sequence[float], tolerance: float) -> Tuple[float, ...]:
    source_last = source.last_volatility_time
    volatility = []
    for lower, upper in zip(times[:-1], times[1:]):
        width = upper - lower
        epsilon = 0.5 * min(tolerance, width) if tolerance > 0.0 else 0.5 * width
        probe = min(upper - epsilon, source_last)
        volatility.append(source.volatility_at(probe))
    return tuple(volatility)


def parameters_common_times(
    parameters1: Parameters,
    parameters2: Parameters,
    tolerance: Optional[float] = None,
) -> Tuple[Parameters, Parameters]:
    """Rewrite two parameter sets on a common volatility grid.

    Parameters
    ----------
    parameters1, parameters2 : HullWhitePiecewiseConstantParameters
        Parameter sets, possibly on different grids.
    tolerance : float, optional
        Breakpoints closer than this are treated as the same point.
        Defaults to ``GridConfig.merge_tolerance``.

    Returns
    -------
    tuple
        Two parameter sets sharing the merged grid, each with the same
        volatility function as its source and its original mean reversion.
    """
    if tolerance is None:
        tolerance = DEFAULT_GRID_CONFIG.merge_tolerance
    times = merge_times(parameters1.volatility_times, parameters2.volatility_times, tolerance)
    logger.debug(
        "Merged grids of %s and %s breakpoints into %s",
        len(parameters1.volatility_times),
        len(parameters2.volatility_times),
        len(times),
    )
    common = tuple(times)
    return (
        Parameters(parameters1.mean_reversion, _resample(parameters1, times, tolerance), common),
        Parameters(parameters2.mean_reversion, _resample(parameters2, times, tolerance), common),
    )
