"""
Valuation Errors

All failures raised by the valuation core are local and recoverable by the
caller (re-prompt, pick a default attribute). None of them are process-fatal.
"""

import math


class ValuationError(ValueError):
    """Base class for errors raised by the valuation core."""

    pass


class InvalidInputError(ValuationError):
    """Raised when a numeric input is unusable (NaN, non-positive area, ...)."""

    pass


class UnknownCategoryError(ValuationError):
    """Raised when an enumerated attribute value is not recognised."""

    def __init__(self, category: str, value):
        self.category = category
        self.value = value
        super().__init__(f"Unknown {category}: {value!r}")


def require_positive(name: str, value) -> float:
    """Return ``value`` as a float, raising InvalidInputError unless > 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if math.isnan(number) or number <= 0:
        raise InvalidInputError(f"{name} must be positive, got {value!r}")
    return number
