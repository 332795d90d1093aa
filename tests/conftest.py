"""Shared Hull-White parameter sets for the test suite."""

import pytest

from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

MEAN_REVERSION = 0.03
MEAN_REVERSION_2 = 0.01
VOLATILITY = [0.015, 0.011, 0.012, 0.013, 0.014, 0.016]
VOLATILITY_TIME = [0.5, 1.0, 2.0, 4.0, 5.0]


@pytest.fixture
def hw_params():
    return HullWhitePiecewiseConstantParameters.of(MEAN_REVERSION, VOLATILITY, VOLATILITY_TIME)


@pytest.fixture
def hw_constant():
    return HullWhitePiecewiseConstantParameters.of(MEAN_REVERSION, [0.01], [])


@pytest.fixture
def hw_constant_2():
    return HullWhitePiecewiseConstantParameters.of(MEAN_REVERSION_2, [0.0125], [])


@pytest.fixture
def hw_constant_step():
    return HullWhitePiecewiseConstantParameters.of(
        MEAN_REVERSION, [0.01, 0.01, 0.01, 0.01], [1.0, 2.0, 3.0]
    )
