import json
from datetime import date

import pandas as pd
import pytest

from ficcmodels.data.loaders import (
    JSONParametersSource,
    load_parameters_csv,
    load_parameters_json,
    parameters_from_dict,
    parameters_from_frame,
    parameters_to_frame,
)
from ficcmodels.errors import ModelValidationError
from ficcmodels.hullwhite.model import HullWhiteModel
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

RECORD = {
    "mean_reversion": 0.03,
    "volatility": [0.015, 0.011, 0.012],
    "volatility_time": [0.5, 1.0],
}


def test_parameters_from_dict():
    params = parameters_from_dict(RECORD)
    assert params == HullWhitePiecewiseConstantParameters.of(0.03, [0.015, 0.011, 0.012], [0.5, 1.0])


def test_parameters_from_dict_with_custom_sentinel():
    params = parameters_from_dict({**RECORD, "volatility_time_max": 50.0})
    assert params.last_volatility_time == 50.0
    assert parameters_from_dict(params.to_dict()) == params


def test_parameters_from_dict_missing_key():
    with pytest.raises(ModelValidationError):
        parameters_from_dict({"volatility": [0.01]})


def test_load_parameters_json(tmp_path):
    path = tmp_path / "hw.json"
    path.write_text(json.dumps(RECORD))
    assert load_parameters_json(path) == parameters_from_dict(RECORD)


def test_frame_round_trip():
    params = parameters_from_dict(RECORD)
    frame = parameters_to_frame(params)
    assert list(frame.columns) == ["time", "volatility"]
    assert list(frame["time"]) == [0.0, 0.5, 1.0]
    assert parameters_from_frame(frame, 0.03) == params


def test_parameters_from_frame_sorts_rows():
    frame = pd.DataFrame({"time": [1.0, 0.0], "volatility": [0.02, 0.01]})
    params = parameters_from_frame(frame, 0.05)
    assert params.volatility == (0.01, 0.02)
    assert params.volatility_times == (0.0, 1.0, 1000.0)


def test_parameters_from_frame_missing_column():
    with pytest.raises(ModelValidationError):
        parameters_from_frame(pd.DataFrame({"time": [0.0]}), 0.03)


def test_load_parameters_csv(tmp_path):
    path = tmp_path / "vols.csv"
    path.write_text("time,volatility\n0.0,0.015\n0.5,0.011\n1.0,0.012\n")
    assert load_parameters_csv(path, 0.03) == parameters_from_dict(RECORD)


def test_json_source_round_trip(tmp_path):
    source = JSONParametersSource(tmp_path)
    model = HullWhiteModel(parameters_from_dict(RECORD), date(2024, 1, 2), currency="EUR")
    path = source.save_model(model, "EUR_HW")
    assert path.name == "2024-01-02_EUR_HW.json"
    loaded = source.load_model(date(2024, 1, 2), "EUR_HW")
    assert loaded.parameters == model.parameters
    assert loaded.time_measure.name == "ACT/365F"
    assert loaded.currency == "EUR"


def test_json_source_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        JSONParametersSource(tmp_path).load_model(date(2024, 1, 2), "USD_HW")
