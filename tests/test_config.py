import pytest

from ficcmodels.config import (
    DEFAULT_EXERCISE_BOUNDARY_CONFIG,
    ExerciseBoundaryConfig,
    GridConfig,
)
from ficcmodels.errors import (
    FiccModelsError,
    InvalidArgumentError,
    NoRootBracketError,
    OutOfRangeError,
    PricingError,
    RootFindingError,
)


def test_default_exercise_boundary_config():
    config = DEFAULT_EXERCISE_BOUNDARY_CONFIG
    assert (config.initial_lower, config.initial_upper) == (-2.0, 2.0)
    assert config.accuracy == 1e-8
    assert config.expansion_ratio == 1.6
    assert config.max_expansions == 50
    assert config.alpha_tolerance == 1e-9


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("FICCMODELS_KAPPA_ACCURACY", "1e-10")
    monkeypatch.setenv("FICCMODELS_KAPPA_MAX_EXPANSIONS", "20")
    config = ExerciseBoundaryConfig.from_env()
    assert config.accuracy == 1e-10
    assert config.max_expansions == 20


def test_config_from_env_defaults(monkeypatch):
    monkeypatch.delenv("FICCMODELS_KAPPA_ACCURACY", raising=False)
    monkeypatch.delenv("FICCMODELS_KAPPA_MAX_EXPANSIONS", raising=False)
    assert ExerciseBoundaryConfig.from_env() == ExerciseBoundaryConfig()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_lower": 2.0, "initial_upper": -2.0},
        {"accuracy": 0.0},
        {"expansion_ratio": -1.0},
        {"max_expansions": -1},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        ExerciseBoundaryConfig(**kwargs)


def test_grid_config_validation():
    assert GridConfig().merge_tolerance == 1e-4
    with pytest.raises(ValueError):
        GridConfig(merge_tolerance=-1.0)


def test_error_hierarchy():
    assert issubclass(OutOfRangeError, InvalidArgumentError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(NoRootBracketError, RootFindingError)
    assert issubclass(RootFindingError, RuntimeError)
    assert issubclass(PricingError, FiccModelsError)


def test_pricing_error_carries_instrument():
    error = PricingError("boom", instrument_id="SWPT-1")
    assert error.instrument_id == "SWPT-1"
    assert str(error) == "[SWPT-1] boom"


def test_out_of_range_error_message():
    error = OutOfRangeError(1200.0, 0.0, 1000.0)
    assert "1200.0" in str(error)
    assert (error.time, error.lower, error.upper) == (1200.0, 0.0, 1000.0)
