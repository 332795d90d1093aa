"""Hull-White one-factor model parameters with piecewise-constant volatility."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

import logging
import math

from ficcmodels.config import VOLATILITY_TIME_MAX
from ficcmodels.errors import InvalidArgumentError, ModelValidationError
from ficcmodels.utils.intervals import locate_interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HullWhitePiecewiseConstantParameters:
    """Mean reversion and volatility term structure of a Hull-White model.

    Attributes
    ----------
    mean_reversion : float
        Mean reversion speed (kappa), strictly positive.
    volatility : tuple of float
        ``volatility[i]`` applies on ``(volatility_times[i], volatility_times[i + 1]]``.
    volatility_times : tuple of float
        Strictly increasing breakpoints starting at ``0.0``. The last element is
        a far-future sentinel closing the last bucket.
    """

    mean_reversion: float
    volatility: Tuple[float, ...]
    volatility_times: Tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean_reversion", float(self.mean_reversion))
        object.__setattr__(self, "volatility", tuple(float(v) for v in self.volatility))
        object.__setattr__(
            self, "volatility_times", tuple(float(t) for t in self.volatility_times)
        )
        self._validate()

    def _validate(self) -> None:
        kappa = self.mean_reversion
        if not math.isfinite(kappa) or kappa <= 0.0:
            raise ModelValidationError(
                f"Mean reversion must be finite and positive, got {kappa!r}"
            )
        times = self.volatility_times
        if len(times) < 2:
            raise ModelValidationError(
                "volatility_times needs at least two breakpoints"
            )
        if len(self.volatility) != len(times) - 1:
            raise ModelValidationError(
                f"Expected {len(times) - 1} volatilities for {len(times)} "
                f"breakpoints, got {len(self.volatility)}"
            )
        if times[0] != 0.0:
            raise ModelValidationError(
                f"volatility_times must start at 0.0, got {times[0]!r}"
            )
        for previous, current in zip(times, times[1:]):
            if not math.isfinite(current) or current <= previous:
                raise ModelValidationError(
                    f"volatility_times must be finite and strictly increasing: "
                    f"{previous!r} followed by {current!r}"
                )
        for index, eta in enumerate(self.volatility):
            if not math.isfinite(eta) or eta < 0.0:
                raise ModelValidationError(
                    f"volatility[{index}] must be finite and non-negative, got {eta!r}"
                )

    @classmethod
    def of(
        cls,
        mean_reversion: float,
        volatility: Sequence[float],
        volatility_time: Sequence[float],
    ) -> "HullWhitePiecewiseConstantParameters":
        """Build parameters from the inner breakpoints only.

        ``0.0`` and :data:`VOLATILITY_TIME_MAX` are added around
        ``volatility_time``, so ``len(volatility)`` must be
        ``len(volatility_time) + 1``.
        """
        times = (0.0, *(float(t) for t in volatility_time), VOLATILITY_TIME_MAX)
        return cls(mean_reversion, tuple(volatility), times)

    @classmethod
    def constant(
        cls, mean_reversion: float, volatility: float
    ) -> "HullWhitePiecewiseConstantParameters":
        """Single-bucket parameters with a constant volatility."""
        return cls.of(mean_reversion, [volatility], [])

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def last_volatility_time(self) -> float:
        return self.volatility_times[-1]

    @property
    def bucket_count(self) -> int:
        return len(self.volatility)

    def volatility_at(self, t: float) -> float:
        """Volatility of the bucket containing ``t``."""
        return self.volatility[locate_interval(self.volatility_times, t) - 1]

    def with_volatility(
        self, volatility: Sequence[float]
    ) -> "HullWhitePiecewiseConstantParameters":
        return replace(self, volatility=tuple(volatility))

    def with_mean_reversion(
        self, mean_reversion: float
    ) -> "HullWhitePiecewiseConstantParameters":
        return replace(self, mean_reversion=mean_reversion)

    # ------------------------------------------------------------------
    # Parameter vector (mean reversion followed by the volatilities)
    # ------------------------------------------------------------------

    @property
    def parameter_count(self) -> int:
        return 1 + len(self.volatility)

    def _check_parameter_index(self, index: int) -> None:
        if not 0 <= index < self.parameter_count:
            raise InvalidArgumentError(
                f"Parameter index {index} out of range [0, {self.parameter_count})"
            )

    def get_parameter(self, index: int) -> float:
        self._check_parameter_index(index)
        if index == 0:
            return self.mean_reversion
        return self.volatility[index - 1]

    def with_parameter(
        self, index: int, value: float
    ) -> "HullWhitePiecewiseConstantParameters":
        """Return a copy with parameter ``index`` replaced by ``value``."""
        self._check_parameter_index(index)
        if index == 0:
            return self.with_mean_reversion(value)
        volatility = list(self.volatility)
        volatility[index - 1] = value
        return self.with_volatility(volatility)

    def parameter_names(self) -> List[str]:
        return ["MeanReversion"] + [
            f"volatility-{i}" for i in range(len(self.volatility))
        ]

    def parameters(self) -> List[float]:
        return [self.mean_reversion, *self.volatility]

    def to_dict(self) -> dict:
        """Serialise to the JSON record layout, inner breakpoints only."""
        record = {
            "mean_reversion": self.mean_reversion,
            "volatility": list(self.volatility),
            "volatility_time": list(self.volatility_times[1:-1]),
        }
        if self.last_volatility_time != VOLATILITY_TIME_MAX:
            record["volatility_time_max"] = self.last_volatility_time
        return record
