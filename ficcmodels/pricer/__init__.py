"""Hull-White pricers working on primitive inputs."""

from .batch import SwaptionRequest, price_swaptions
from .capfloor import CapletPeriod, cap_floor_leg_present_value, caplet_present_value
from .futures import (
    overnight_futures_convexity_adjustment,
    overnight_futures_gammas,
    overnight_futures_price,
)
from .swaption import present_value_physical, swaption_alphas

__all__ = [
    "swaption_alphas",
    "present_value_physical",
    "caplet_present_value",
    "CapletPeriod",
    "cap_floor_leg_present_value",
    "overnight_futures_gammas",
    "overnight_futures_price",
    "overnight_futures_convexity_adjustment",
    "SwaptionRequest",
    "price_swaptions",
]
