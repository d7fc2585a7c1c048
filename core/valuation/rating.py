"""
Value Rating Classifier

Maps a price-per-area (BAM/m2) to a qualitative tier. Tiers are
inclusive-lower / exclusive-upper, with the last tier unbounded, so every
real number lands in exactly one tier.
"""

import math
from enum import Enum
from typing import Final

from core.errors import InvalidInputError


# =============================================================================
# Tier Thresholds (BAM per m2)
# =============================================================================

EXCELLENT_VALUE_CEILING: Final[float] = 1400.0
GOOD_VALUE_CEILING: Final[float] = 1600.0  # also the undervalued listing cut-off
FAIR_VALUE_CEILING: Final[float] = 1800.0
ABOVE_MARKET_CEILING: Final[float] = 2000.0


class ValueRating(Enum):
    """
    Qualitative value tier.

    < 1400: Excellent Value
    1400-1599: Good Value
    1600-1799: Fair Value
    1800-1999: Above Market
    >= 2000: Overpriced
    """
    EXCELLENT = ("Excellent Value", "emerald")
    GOOD = ("Good Value", "green")
    FAIR = ("Fair Value", "amber")
    ABOVE_MARKET = ("Above Market", "orange")
    OVERPRICED = ("Overpriced", "red")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def color(self) -> str:
        return self.value[1]


def classify(price_per_area: float) -> ValueRating:
    """
    Classify a price-per-area into a value tier.

    Args:
        price_per_area: Price per square metre (any real, including infinities)

    Returns:
        The single ValueRating the value falls into

    Raises:
        InvalidInputError: if the value is NaN
    """
    if isinstance(price_per_area, float) and math.isnan(price_per_area):
        raise InvalidInputError("price_per_area must not be NaN")

    if price_per_area < EXCELLENT_VALUE_CEILING:
        return ValueRating.EXCELLENT
    elif price_per_area < GOOD_VALUE_CEILING:
        return ValueRating.GOOD
    elif price_per_area < FAIR_VALUE_CEILING:
        return ValueRating.FAIR
    elif price_per_area < ABOVE_MARKET_CEILING:
        return ValueRating.ABOVE_MARKET
    else:
        return ValueRating.OVERPRICED
