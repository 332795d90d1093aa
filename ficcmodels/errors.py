"""Exception types raised by the Hull-White analytics.

All errors derive from :class:`FiccModelsError`. Argument and model errors also
derive from ``ValueError`` and root-finding errors from ``RuntimeError`` so
callers written against the built-in exceptions keep working.
"""

from __future__ import annotations

from typing import Optional


class FiccModelsError(Exception):
    """Base class for all errors raised by ficcmodels."""


class InvalidArgumentError(FiccModelsError, ValueError):
    """Raised when a function is called with inconsistent arguments."""


class OutOfRangeError(InvalidArgumentError):
    """Raised when a time lies outside the volatility grid."""

    def __init__(self, time: float, lower: float, upper: float):
        self.time = time
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"Time {time!r} is outside the volatility grid [{lower!r}, {upper!r}]"
        )


class ModelValidationError(FiccModelsError, ValueError):
    """Raised when model parameters are inconsistent or produce invalid values."""


class RootFindingError(FiccModelsError, RuntimeError):
    """Raised when root-finding fails to converge."""


class NoRootBracketError(RootFindingError):
    """Raised when no sign change can be found for the objective function."""


class PricingError(FiccModelsError):
    """Raised by pricers, tagged with the instrument that failed."""

    def __init__(self, message: str, instrument_id: Optional[str] = None):
        self.instrument_id = instrument_id
        if instrument_id is not None:
            message = f"[{instrument_id}] {message}"
        super().__init__(message)
