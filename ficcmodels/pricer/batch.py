"""Pricing a book of swaptions on a thread pool."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import logging
import math

import pandas as pd

from ficcmodels.config import ExerciseBoundaryConfig
from ficcmodels.errors import FiccModelsError, PricingError
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters
from ficcmodels.pricer.swaption import present_value_physical

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["instrument_id", "present_value", "error"]


@dataclass(frozen=True)
class SwaptionRequest:
    """Inputs of one physical swaption valuation."""

    instrument_id: str
    expiry_time: float
    cash_flow_times: Tuple[float, ...]
    discounted_cash_flows: Tuple[float, ...]
    payer_fixed: bool
    long: bool = True


def _price_one(
    parameters: HullWhitePiecewiseConstantParameters,
    request: SwaptionRequest,
    config: Optional[ExerciseBoundaryConfig],
) -> float:
    try:
        return present_value_physical(
            parameters,
            request.expiry_time,
            request.cash_flow_times,
            request.discounted_cash_flows,
            payer_fixed=request.payer_fixed,
            long=request.long,
            config=config,
        )
    except FiccModelsError as exc:
        raise PricingError(str(exc), request.instrument_id) from exc


def price_swaptions(
    parameters: HullWhitePiecewiseConstantParameters,
    requests: Sequence[SwaptionRequest],
    max_workers: Optional[int] = None,
    config: Optional[ExerciseBoundaryConfig] = None,
    raise_on_error: bool = False,
) -> pd.DataFrame:
    """
    Value independent swaptions in parallel.

    Args:
        parameters: Hull-White parameters shared by all requests
        requests: Swaptions to value
        max_workers: Thread pool size (executor default when ``None``)
        config: Exercise boundary search settings
        raise_on_error: Re-raise the first failure instead of recording it

    Returns:
        DataFrame with one row per request, in request order, with columns
        ``instrument_id``, ``present_value`` (NaN on failure) and ``error``
        (``None`` on success).
    """
    rows = [None] * len(requests)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_price_one, parameters, request, config): i
            for i, request in enumerate(requests)
        }
        for future in as_completed(futures):
            idx = futures[future]
            request = requests[idx]
            try:
                rows[idx] = (request.instrument_id, future.result(), None)
            except PricingError as exc:
                if raise_on_error:
                    raise
                logger.warning("Swaption valuation failed: %s", exc)
                rows[idx] = (request.instrument_id, math.nan, str(exc))

    failures = sum(1 for row in rows if row[2] is not None)
    logger.info("Priced %s swaptions, %s failures", len(rows), failures)
    ids, values, errors = zip(*rows) if rows else ((), (), ())
    # object dtype keeps None for successful rows
    return pd.DataFrame(
        {
            "instrument_id": list(ids),
            "present_value": pd.Series(values, dtype=float),
            "error": pd.Series(errors, dtype=object),
        },
        columns=RESULT_COLUMNS,
    )
