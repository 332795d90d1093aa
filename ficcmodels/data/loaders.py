"""
Loading Hull-White parameters from files and data frames.

JSON records hold the inner breakpoints only::

    {"mean_reversion": 0.03,
     "volatility": [0.015, 0.011, 0.012],
     "volatility_time": [0.5, 1.0]}

Tabular records (CSV or DataFrame) hold one row per volatility bucket with
the bucket start time in ``time`` (the first row starts at ``0.0``) and its
volatility in ``volatility``.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import logging

import pandas as pd

from ficcmodels.config import VOLATILITY_TIME_MAX
from ficcmodels.conventions.daycount import get_time_measure
from ficcmodels.errors import ModelValidationError
from ficcmodels.hullwhite.model import HullWhiteModel
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

TIME_COLUMN = "time"
VOLATILITY_COLUMN = "volatility"


def parameters_from_dict(record: Mapping[str, Any]) -> HullWhitePiecewiseConstantParameters:
    """Build parameters from a JSON-style record."""
    missing = [k for k in ("mean_reversion", "volatility") if k not in record]
    if missing:
        raise ModelValidationError(f"Parameter record is missing keys: {missing}")
    last_time = float(record.get("volatility_time_max", VOLATILITY_TIME_MAX))
    times = (0.0, *(float(t) for t in record.get("volatility_time", [])), last_time)
    return HullWhitePiecewiseConstantParameters(
        record["mean_reversion"], tuple(record["volatility"]), times
    )


def load_parameters_json(filepath: PathLike) -> HullWhitePiecewiseConstantParameters:
    with open(filepath, "r") as f:
        record = json.load(f)
    logger.debug("Loaded Hull-White parameters from %s", filepath)
    return parameters_from_dict(record)


def parameters_from_frame(
    frame: pd.DataFrame,
    mean_reversion: float,
    last_time: float = VOLATILITY_TIME_MAX,
) -> HullWhitePiecewiseConstantParameters:
    """
    Build parameters from a frame of volatility buckets.

    Args:
        frame: One row per bucket with ``time`` and ``volatility`` columns
        mean_reversion: Mean reversion of the model
        last_time: Sentinel closing the last bucket

    Returns:
        Parameters with ``volatility_times = [*frame.time, last_time]``
    """
    missing = {TIME_COLUMN, VOLATILITY_COLUMN} - set(frame.columns)
    if missing:
        raise ModelValidationError(
            f"Volatility frame is missing columns: {sorted(missing)}"
        )
    ordered = frame.sort_values(TIME_COLUMN)
    times = [float(t) for t in ordered[TIME_COLUMN]] + [float(last_time)]
    volatility = [float(v) for v in ordered[VOLATILITY_COLUMN]]
    return HullWhitePiecewiseConstantParameters(mean_reversion, tuple(volatility), tuple(times))


def parameters_to_frame(parameters: HullWhitePiecewiseConstantParameters) -> pd.DataFrame:
    """Inverse of :func:`parameters_from_frame` (the sentinel is dropped)."""
    return pd.DataFrame(
        {
            TIME_COLUMN: list(parameters.volatility_times[:-1]),
            VOLATILITY_COLUMN: list(parameters.volatility),
        }
    )


def load_parameters_csv(
    filepath: PathLike, mean_reversion: float
) -> HullWhitePiecewiseConstantParameters:
    frame = pd.read_csv(filepath)
    logger.debug("Loaded %s volatility buckets from %s", len(frame), filepath)
    return parameters_from_frame(frame, mean_reversion)


class JSONParametersSource:
    """
    Dated Hull-White models stored as JSON files.

    Files are named ``{valuation_date}_{name}.json`` and may carry optional
    ``day_count`` and ``currency`` keys next to the parameter record.
    """

    def __init__(self, data_directory: PathLike):
        self.data_directory = Path(data_directory)

    def _get_parameters_file(self, valuation_date: date, name: str) -> Path:
        return self.data_directory / f"{valuation_date.isoformat()}_{name}.json"

    def _load_json_file(self, filepath: Path) -> Dict:
        with open(filepath, "r") as f:
            return json.load(f)

    def load_model(self, valuation_date: date, name: str) -> HullWhiteModel:
        filepath = self._get_parameters_file(valuation_date, name)
        if not filepath.exists():
            raise FileNotFoundError(
                f"No Hull-White parameters for {valuation_date}, {name} in {self.data_directory}"
            )
        record = self._load_json_file(filepath)
        return HullWhiteModel(
            parameters_from_dict(record),
            valuation_date,
            get_time_measure(record.get("day_count", "ACT/365F")),
            record.get("currency"),
        )

    def save_model(self, model: HullWhiteModel, name: str, currency: Optional[str] = None) -> Path:
        record = model.parameters.to_dict()
        record["day_count"] = model.time_measure.name
        if currency or model.currency:
            record["currency"] = currency or model.currency
        filepath = self._get_parameters_file(model.valuation_date, name)
        self.data_directory.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w") as f:
            json.dump(record, f, indent=2)
        logger.debug("Saved Hull-White parameters to %s", filepath)
        return filepath
