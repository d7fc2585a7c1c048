"""
Valuation Engine

Implements the comparable-based valuation pipeline:
- Baseline price-per-area from comparables
- Feature multiplier adjustment
- Single rounding step on the price-per-area
- Placeholder confidence
- Value rating
"""

import logging
from typing import Iterable, Optional

from core.listings.models import Listing

from .comparables import ComparableSelector, DEFAULT_BASELINE_PRICE_PER_AREA
from .confidence import ConfidenceEstimator
from .models import TargetPropertyAttributes, ValuationResult
from .multipliers import (
    DEFAULT_MULTIPLIER_TABLE,
    FeatureMultiplierModel,
    MultiplierTable,
    round_half_up,
)
from .rating import classify


logger = logging.getLogger(__name__)


class ValuationEngine:
    """
    Complete valuation pipeline for a target property.

    Pipeline order:
    1. BASELINE - Mean price-per-area of exact-location comparables
    2. ADJUST - Compose the feature multipliers
    3. ROUND - Round the price-per-area once; total = price-per-area x area
    4. CONFIDENCE - Independent placeholder draw
    5. RATE - Classify the rounded price-per-area

    The engine holds configuration only. It keeps no per-request state, so
    one instance can serve any number of independent requests.
    """

    def __init__(
        self,
        default_baseline: float = DEFAULT_BASELINE_PRICE_PER_AREA,
        table: MultiplierTable = DEFAULT_MULTIPLIER_TABLE,
        reference_year: Optional[int] = None,
        confidence_estimator: Optional[ConfidenceEstimator] = None,
    ):
        """
        Initialize valuation engine.

        Args:
            default_baseline: Baseline used when a location has no comparables
            table: Multiplier table shared by every valuation
            reference_year: Year property age is measured from (default: this year)
            confidence_estimator: Source of the placeholder confidence
        """
        self._selector = ComparableSelector(default_baseline)
        self._model = FeatureMultiplierModel(table, reference_year=reference_year)
        self._confidence = confidence_estimator or ConfidenceEstimator()

    @property
    def selector(self) -> ComparableSelector:
        return self._selector

    @property
    def model(self) -> FeatureMultiplierModel:
        return self._model

    def estimate(
        self,
        target: TargetPropertyAttributes,
        comparables: Iterable[Listing],
    ) -> ValuationResult:
        """
        Value a target property against a set of comparables.

        Args:
            target: Attributes of the property being valued
            comparables: Candidate comparable listings (filtered by location here)

        Returns:
            ValuationResult with price, price-per-area, confidence and rating
        """
        # Step 1: Baseline from comparables
        selection = self._selector.select_baseline(target.location, comparables)

        # Step 2: Feature multipliers
        multipliers = self._model.breakdown(target)
        adjusted = self._model.adjust(selection.baseline, target, multipliers)

        # Step 3: Round once, at the price-per-area stage
        price_per_area = round_half_up(adjusted)
        estimated_price = price_per_area * target.area

        # Step 4: Placeholder confidence, never an input to price
        confidence = self._confidence.estimate()

        # Step 5: Value rating
        rating = classify(price_per_area)

        logger.debug(
            "Valued %r (%.1f m2): baseline %.2f from %d comps -> %d/m2, %s",
            target.location,
            target.area,
            selection.baseline,
            selection.comp_count,
            price_per_area,
            rating.label,
        )

        return ValuationResult(
            estimated_price=estimated_price,
            estimated_price_per_area=price_per_area,
            confidence=confidence,
            rating=rating,
            baseline_price_per_area=selection.baseline,
            comps_used=selection.comp_count,
            default_baseline_used=selection.default_used,
            multipliers=multipliers,
        )


def estimate_valuation(
    target: TargetPropertyAttributes,
    comparables: Iterable[Listing],
    engine: Optional[ValuationEngine] = None,
) -> ValuationResult:
    """Value ``target`` against ``comparables`` with a default or given engine."""
    return (engine or ValuationEngine()).estimate(target, comparables)
