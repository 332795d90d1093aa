"""
Day-count based time measures.

Model times are year fractions from the valuation date. The conversion from
dates uses QuantLib's day counters; dates before the valuation date give
negative times.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Union

import QuantLib as ql

DateLike = Union[date, datetime]


def _ql_date(value: DateLike) -> ql.Date:
    if isinstance(value, datetime):
        value = value.date()
    return ql.Date(value.day, value.month, value.year)


@dataclass(frozen=True)
class DayCountTimeMeasure:
    """Signed year fractions between dates from a QuantLib day counter."""

    name: str
    day_counter: ql.DayCounter = field(repr=False, compare=False)

    def relative_time(self, valuation_date: DateLike, target: DateLike) -> float:
        """Model time of ``target``; negative when it is before ``valuation_date``."""
        start, end = _ql_date(valuation_date), _ql_date(target)
        if end < start:
            return -self.day_counter.yearFraction(end, start)
        return self.day_counter.yearFraction(start, end)

    def day_count(self, start: DateLike, end: DateLike) -> int:
        return self.day_counter.dayCount(_ql_date(start), _ql_date(end))

    def __str__(self) -> str:
        return self.name


ACT_365F = DayCountTimeMeasure("ACT/365F", ql.Actual365Fixed())
ACT_360 = DayCountTimeMeasure("ACT/360", ql.Actual360())

TIME_MEASURES: Dict[str, DayCountTimeMeasure] = {
    "ACT/365F": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
}


def get_time_measure(name: str) -> DayCountTimeMeasure:
    """Look up a time measure by its (case-insensitive) day-count name."""
    try:
        return TIME_MEASURES[name.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown day count convention: {name}. Available: {sorted(TIME_MEASURES)}"
        ) from None
