import pytest

from ficcmodels.hullwhite.formulas import alpha2_forward_g_part, variance_cross_term_cash_account
from ficcmodels.hullwhite.grid import merge_times, parameters_common_times
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

T1 = [0.5, 1.0, 2.0, 4.0, 10.0]
ETA1 = [0.015, 0.011, 0.012, 0.013, 0.014, 0.015]
T2 = [0.25, 1.5, 2.0, 4.5, 9.0, 9.5]
ETA2 = [0.025, 0.021, 0.022, 0.023, 0.024, 0.025, 0.026]
TEST_TIMES = [0.0, 0.10, 0.249, 0.25, 0.261, 0.499, 0.50, 0.501, 2.5, 9.4, 9.9, 10.0, 10.5]


@pytest.fixture
def hw1():
    return HullWhitePiecewiseConstantParameters.of(0.01, ETA1, T1)


@pytest.fixture
def hw2():
    return HullWhitePiecewiseConstantParameters.of(0.02, ETA2, T2)


def test_common_times_preserve_models(hw1, hw2):
    hw1_common, hw2_common = parameters_common_times(hw1, hw2)
    assert hw1_common.mean_reversion == hw1.mean_reversion
    assert hw2_common.mean_reversion == hw2.mean_reversion
    assert hw1_common.volatility_times == hw2_common.volatility_times
    assert len(hw1_common.volatility) == len(hw2_common.volatility)
    for t in TEST_TIMES:
        assert alpha2_forward_g_part(hw1_common, 0, t) == pytest.approx(
            alpha2_forward_g_part(hw1, 0, t), abs=1e-8
        )
        assert alpha2_forward_g_part(hw2_common, 0, t) == pytest.approx(
            alpha2_forward_g_part(hw2, 0, t), abs=1e-8
        )


def test_common_times_union(hw1, hw2):
    hw1_common, _ = parameters_common_times(hw1, hw2)
    assert hw1_common.volatility_times == (
        0.0, 0.25, 0.5, 1.0, 1.5, 2.0, 4.0, 4.5, 9.0, 9.5, 10.0, 1000.0,
    )
    assert hw1_common.volatility[:4] == (0.015, 0.015, 0.011, 0.012)


def test_common_times_idempotent(hw1):
    same1, same2 = parameters_common_times(hw1, hw1)
    assert same1 == hw1
    assert same2 == hw1


def test_common_times_enable_cross_term(hw1, hw2):
    hw1_common, hw2_common = parameters_common_times(hw1, hw2)
    value = variance_cross_term_cash_account(
        hw1_common, hw2_common, 0.0, 5.0, 8.0, 9.0, check_grid=True
    )
    assert value > 0.0


def test_merge_times_drops_near_coincident_points():
    merged = merge_times([0.0, 1.0, 2.0, 1000.0], [0.0, 1.00005, 3.0, 1000.0], 1e-4)
    assert merged == [0.0, 1.0, 2.0, 3.0, 1000.0]


def test_merge_times_keeps_last_sentinel():
    merged = merge_times([0.0, 1.0, 1000.0], [0.0, 999.99995, 1000.0], 1e-4)
    assert merged == [0.0, 1.0, 1000.0]


def test_common_times_with_earlier_sentinel():
    short = HullWhitePiecewiseConstantParameters(0.01, (0.01, 0.02), (0.0, 1.0, 20.0))
    long = HullWhitePiecewiseConstantParameters.of(0.02, [0.03, 0.04], [5.0])
    short_common, long_common = parameters_common_times(short, long)
    assert short_common.volatility_times == (0.0, 1.0, 5.0, 20.0, 1000.0)
    # the last volatility of the shorter grid is extended
    assert short_common.volatility == (0.01, 0.02, 0.02, 0.02)
    assert long_common.volatility == (0.03, 0.03, 0.04, 0.04)


def test_common_times_zero_tolerance(hw1, hw2):
    hw1_common, _ = parameters_common_times(hw1, hw2, tolerance=0.0)
    assert len(hw1_common.volatility_times) == 12


def test_common_times_scenario_union_and_lookup():
    p1 = HullWhitePiecewiseConstantParameters.of(0.01, [0.010, 0.012, 0.014], [2.0, 5.0])
    p2 = HullWhitePiecewiseConstantParameters.of(0.02, [0.020, 0.022, 0.024], [3.0, 5.0])
    p1_common, p2_common = parameters_common_times(p1, p2)
    times = p1_common.volatility_times
    assert times == (0.0, 2.0, 3.0, 5.0, 1000.0)
    for i, (lower, upper) in enumerate(zip(times[:-1], times[1:])):
        midpoint = 0.5 * (lower + upper)
        assert p1_common.volatility[i] == p1.volatility_at(midpoint)
        assert p2_common.volatility[i] == p2.volatility_at(midpoint)
    assert p1_common.volatility == (0.010, 0.012, 0.012, 0.014)
    assert p2_common.volatility == (0.020, 0.020, 0.022, 0.024)
