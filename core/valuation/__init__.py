"""
Valuation Engine v1.0

Comparable-based valuation: a baseline price-per-area from same-location
listings, adjusted by a fixed multiplier table, rounded once, rated, and
paired with a placeholder confidence figure.
"""

from .models import (
    Amenity,
    Condition,
    EquipmentLevel,
    HeatingType,
    Orientation,
    PropertyType,
    TargetPropertyAttributes,
    ValuationResult,
)
from .rating import ValueRating, classify, GOOD_VALUE_CEILING
from .comparables import (
    BaselineSelection,
    ComparableSelector,
    DEFAULT_BASELINE_PRICE_PER_AREA,
    select_baseline,
)
from .multipliers import (
    DEFAULT_MULTIPLIER_TABLE,
    FeatureMultiplierModel,
    MultiplierTable,
    round_half_up,
)
from .confidence import ConfidenceEstimator
from .engine import ValuationEngine, estimate_valuation

__all__ = [
    # Models
    "Amenity",
    "Condition",
    "EquipmentLevel",
    "HeatingType",
    "Orientation",
    "PropertyType",
    "TargetPropertyAttributes",
    "ValuationResult",
    # Rating
    "ValueRating",
    "classify",
    "GOOD_VALUE_CEILING",
    # Comparables
    "BaselineSelection",
    "ComparableSelector",
    "DEFAULT_BASELINE_PRICE_PER_AREA",
    "select_baseline",
    # Multipliers
    "DEFAULT_MULTIPLIER_TABLE",
    "FeatureMultiplierModel",
    "MultiplierTable",
    "round_half_up",
    # Engine
    "ConfidenceEstimator",
    "ValuationEngine",
    "estimate_valuation",
]

__version__ = "1.0"
