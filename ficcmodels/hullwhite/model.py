"""Dated Hull-White model: parameters anchored at a valuation date."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Sequence

import logging

from ficcmodels.conventions.daycount import (
    ACT_365F,
    DateLike,
    DayCountTimeMeasure,
    get_time_measure,
)
from ficcmodels.hullwhite import formulas
from ficcmodels.hullwhite.parameters import HullWhitePiecewiseConstantParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HullWhiteModel:
    """Hull-White parameters together with the time measure used to read them.

    Attributes:
        parameters: Mean reversion and piecewise-constant volatility.
        valuation_date: Date corresponding to model time ``0.0``.
        time_measure: Converts dates into year fractions from the valuation date.
        currency: Optional ISO currency code, informational only.
    """

    parameters: HullWhitePiecewiseConstantParameters
    valuation_date: date
    time_measure: DayCountTimeMeasure = field(default=ACT_365F)
    currency: Optional[str] = None

    @classmethod
    def of(
        cls,
        mean_reversion: float,
        volatility: Sequence[float],
        volatility_time: Sequence[float],
        valuation_date: date,
        day_count: str = "ACT/365F",
        currency: Optional[str] = None,
    ) -> "HullWhiteModel":
        parameters = HullWhitePiecewiseConstantParameters.of(
            mean_reversion, volatility, volatility_time
        )
        return cls(parameters, valuation_date, get_time_measure(day_count), currency)

    def relative_time(self, target: DateLike) -> float:
        """Year fraction from the valuation date to ``target``."""
        return self.time_measure.relative_time(self.valuation_date, target)

    def relative_times(self, targets: Sequence[DateLike]) -> List[float]:
        return [self.relative_time(target) for target in targets]

    # Parameter vector, delegated to the underlying parameters

    @property
    def parameter_count(self) -> int:
        return self.parameters.parameter_count

    def get_parameter(self, index: int) -> float:
        return self.parameters.get_parameter(index)

    def with_parameter(self, index: int, value: float) -> "HullWhiteModel":
        return replace(self, parameters=self.parameters.with_parameter(index, value))

    def with_parameters(
        self, parameters: HullWhitePiecewiseConstantParameters
    ) -> "HullWhiteModel":
        return replace(self, parameters=parameters)

    def parameter_names(self) -> List[str]:
        return self.parameters.parameter_names()

    # Dated shortcuts

    def alpha_ratio(
        self, expiry: DateLike, numeraire_date: DateLike, bond_maturity: DateLike
    ) -> float:
        """Volatility of ``P(., bond_maturity) / P(., numeraire_date)`` up to ``expiry``."""
        return formulas.alpha_ratio_discount_factors(
            self.parameters,
            0.0,
            self.relative_time(expiry),
            self.relative_time(numeraire_date),
            self.relative_time(bond_maturity),
        )

    def alpha_cash_account(self, expiry: DateLike, bond_maturity: DateLike) -> float:
        return formulas.alpha_cash_account(
            self.parameters, 0.0, self.relative_time(expiry), self.relative_time(bond_maturity)
        )
