"""
RealEstate IQ - Core Business Logic

This module provides the valuation pipeline and its supporting services:
1. Listing Store (read-only reference listings)
2. Comparable Selection (baseline price-per-area)
3. Feature Multipliers (adjusted price-per-area)
4. Confidence & Value Rating
5. Listing Search (search/browse, undervalued deals)
6. Market Tools (time to sell, scenarios, forecast, renovation ROI)
"""

from .errors import ValuationError, InvalidInputError, UnknownCategoryError

# Valuation Engine v1.0
from .valuation import (
    Amenity,
    Condition,
    EquipmentLevel,
    HeatingType,
    Orientation,
    PropertyType,
    TargetPropertyAttributes,
    ValuationResult,
    ValueRating,
    classify,
    ComparableSelector,
    FeatureMultiplierModel,
    MultiplierTable,
    ConfidenceEstimator,
    ValuationEngine,
    estimate_valuation,
)

# Listing Store & Filter
from .listings import (
    Listing,
    ListingStore,
    ListingFilter,
    SearchCriteria,
    search_listings,
    undervalued_listings,
)

__all__ = [
    # Errors
    "ValuationError",
    "InvalidInputError",
    "UnknownCategoryError",
    # Valuation Engine
    "Amenity",
    "Condition",
    "EquipmentLevel",
    "HeatingType",
    "Orientation",
    "PropertyType",
    "TargetPropertyAttributes",
    "ValuationResult",
    "ValueRating",
    "classify",
    "ComparableSelector",
    "FeatureMultiplierModel",
    "MultiplierTable",
    "ConfidenceEstimator",
    "ValuationEngine",
    "estimate_valuation",
    # Listings
    "Listing",
    "ListingStore",
    "ListingFilter",
    "SearchCriteria",
    "search_listings",
    "undervalued_listings",
]
