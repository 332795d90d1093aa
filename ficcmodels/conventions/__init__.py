"""Conventions used to turn dates into model times."""

from .daycount import ACT_360, ACT_365F, DayCountTimeMeasure, get_time_measure

__all__ = [
    "DayCountTimeMeasure",
    "get_time_measure",
    "ACT_365F",
    "ACT_360",
]
