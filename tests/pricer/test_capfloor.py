import math

import pytest

from ficcmodels.hullwhite.formulas import alpha_ratio_discount_factors
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters
from ficcmodels.pricer.capfloor import CapletPeriod, cap_floor_leg_present_value, caplet_present_value

EXPIRY, START, END = 2.0, 2.01, 2.26
DELTA = 0.25
FORWARD = 0.03
DF_END = math.exp(-0.03 * END)


def price(params, strike, is_call, payment=END, df=DF_END, expiry=EXPIRY):
    return caplet_present_value(
        params, expiry, START, END, payment, FORWARD, strike, DELTA, DELTA, df, 1_000_000.0, is_call
    )


@pytest.mark.parametrize("strike", [0.01, 0.03, 0.05])
def test_call_put_parity(hw_params, strike):
    call = price(hw_params, strike, True)
    put = price(hw_params, strike, False)
    assert call - put == pytest.approx(DELTA * (FORWARD - strike) * DF_END * 1_000_000.0, rel=1e-10)


def test_caplet_is_worth_more_than_intrinsic(hw_params):
    call = price(hw_params, 0.025, True)
    assert call > DELTA * (FORWARD - 0.025) * DF_END * 1_000_000.0


def test_zero_volatility_gives_intrinsic():
    params = HullWhitePiecewiseConstantParameters.of(0.03, [0.0], [])
    assert price(params, 0.02, True) == pytest.approx(DELTA * 0.01 * DF_END * 1_000_000.0)
    assert price(params, 0.02, False) == 0.0


def test_expired_caplet(hw_params):
    assert price(hw_params, 0.02, True, expiry=-0.01) == 0.0


def test_payment_delay_uses_second_alpha(hw_params):
    payment = 2.5
    alpha1 = alpha_ratio_discount_factors(hw_params, 0.0, EXPIRY, payment, END)
    assert alpha1 < 0.0
    df_payment = math.exp(-0.03 * payment)
    delayed = price(hw_params, 0.03, True, payment=payment, df=df_payment)
    assert delayed > 0.0
    assert delayed != pytest.approx(price(hw_params, 0.03, True, df=df_payment), rel=1e-12)


def test_caplet_increases_with_volatility(hw_params):
    bumped = hw_params.with_volatility([2.0 * v for v in hw_params.volatility])
    assert price(bumped, 0.03, True) > price(hw_params, 0.03, True)


def leg_periods(strike):
    periods = []
    for i in range(4):
        start = 1.0 + 0.25 * i
        end = start + DELTA
        periods.append(
            CapletPeriod(
                expiry_time=start - 0.01,
                start_time=start,
                end_time=end,
                payment_time=end,
                forward_rate=0.03 + 0.002 * i,
                strike=strike,
                accrual_index=DELTA,
                accrual_payment=DELTA,
                discount_factor_payment=math.exp(-0.03 * end),
                notional=1_000_000.0,
            )
        )
    return periods


def test_cap_leg_is_sum_of_caplets(hw_params):
    periods = leg_periods(0.028)
    expected = sum(
        caplet_present_value(
            hw_params, p.expiry_time, p.start_time, p.end_time, p.payment_time, p.forward_rate,
            p.strike, p.accrual_index, p.accrual_payment, p.discount_factor_payment, p.notional, True,
        )
        for p in periods
    )
    assert cap_floor_leg_present_value(hw_params, periods) == pytest.approx(expected, rel=1e-12)


def test_cap_floor_leg_parity(hw_params):
    periods = leg_periods(0.028)
    cap = cap_floor_leg_present_value(hw_params, periods, is_cap=True)
    floor = cap_floor_leg_present_value(hw_params, periods, is_cap=False)
    swap = sum(
        p.accrual_index * (p.forward_rate - p.strike) * p.discount_factor_payment * p.notional
        for p in periods
    )
    assert cap - floor == pytest.approx(swap, rel=1e-9)


def test_empty_leg(hw_params):
    assert cap_floor_leg_present_value(hw_params, []) == 0.0
