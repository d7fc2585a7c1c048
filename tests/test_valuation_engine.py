"""
Tests for the Valuation Engine

Verifies:
- Baseline is the mean price-per-area of exact-location comparables
- Default baseline when no comparables match
- Worked Sarajevo example
- Single rounding: price == price-per-area x area exactly
- Deterministic prices for identical input
- Monotonicity in area and condition
- Invalid input and unknown categories are rejected
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import InvalidInputError, UnknownCategoryError
from core.listings import Listing
from core.valuation import (
    Amenity,
    ComparableSelector,
    Condition,
    ConfidenceEstimator,
    DEFAULT_BASELINE_PRICE_PER_AREA,
    EquipmentLevel,
    HeatingType,
    Orientation,
    PropertyType,
    TargetPropertyAttributes,
    ValuationEngine,
    ValueRating,
    estimate_valuation,
    round_half_up,
    select_baseline,
)


REFERENCE_YEAR = 2024


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def create_listing():
    """Factory fixture for listings with an exact price-per-area."""
    def _create(
        price_per_area: float,
        area: float,
        city: str = "Sarajevo",
        listing_id: str = None,
    ) -> Listing:
        return Listing(
            id=listing_id or f"L-{price_per_area}-{area}",
            title=f"Apartment {area} m2",
            city=city,
            area=area,
            floor=2,
            year_built=2005,
            price=price_per_area * area,
        )
    return _create


@pytest.fixture
def sarajevo_comps(create_listing):
    """The three Sarajevo comparables of the worked example."""
    return [
        create_listing(1888, 45, listing_id="p1"),
        create_listing(1923, 65, listing_id="p2"),
        create_listing(1500, 28, listing_id="p3"),
    ]


@pytest.fixture
def create_target():
    """Factory fixture for target properties (new, furnished, south-facing)."""
    def _create(**overrides) -> TargetPropertyAttributes:
        values = dict(
            location="Sarajevo",
            area=50,
            level=2,
            year_built=REFERENCE_YEAR - 2,
            condition=Condition.NEW,
            property_type=PropertyType.APARTMENT,
            heating=HeatingType.CENTRAL,
            equipment=EquipmentLevel.FURNISHED,
            orientation=Orientation.SOUTH,
            amenities=frozenset(),
        )
        values.update(overrides)
        return TargetPropertyAttributes(**values)
    return _create


@pytest.fixture
def engine():
    """Engine with a fixed reference year and seeded confidence."""
    return ValuationEngine(
        reference_year=REFERENCE_YEAR,
        confidence_estimator=ConfidenceEstimator(seed=42),
    )


# =============================================================================
# Test: Comparable Selection
# =============================================================================

class TestComparableSelection:
    """Tests for baseline selection."""

    def test_baseline_is_mean_price_per_area(self, sarajevo_comps):
        """Baseline should be the arithmetic mean of matching comps."""
        baseline = select_baseline("Sarajevo", sarajevo_comps)

        assert baseline == pytest.approx((1888 + 1923 + 1500) / 3)
        assert baseline == pytest.approx(1770.33, abs=0.01)

    def test_location_match_is_exact(self, create_listing):
        """Only listings whose city matches exactly are comparables."""
        comps = [
            create_listing(1000, 50, city="Sarajevo"),
            create_listing(3000, 50, city="sarajevo"),
            create_listing(3000, 50, city="Sarajevo "),
        ]

        selection = ComparableSelector().select_baseline("Sarajevo", comps)

        assert selection.comp_count == 1
        assert selection.baseline == pytest.approx(1000)

    def test_no_comparables_uses_default_baseline(self, sarajevo_comps):
        """Unknown location falls back to the documented 1700 BAM/m2."""
        selection = ComparableSelector().select_baseline("Mostar", sarajevo_comps)

        assert DEFAULT_BASELINE_PRICE_PER_AREA == 1700.0
        assert selection.baseline == 1700.0
        assert selection.default_used is True
        assert selection.comps == []

    def test_default_baseline_is_configurable(self):
        """A configured default replaces the built-in one."""
        assert select_baseline("Mostar", [], default_baseline=1500) == 1500.0


# =============================================================================
# Test: Worked Example
# =============================================================================

class TestWorkedExample:
    """The Sarajevo example: new, 50 m2, level 2, south, furnished, central."""

    def test_example_price_per_area(self, engine, sarajevo_comps, create_target):
        """1770.33 x 1.15 x 1.02 x 1.15 x 1.05 x 1.08 x 1.03 rounds to 2789."""
        result = engine.estimate(create_target(), sarajevo_comps)

        assert result.estimated_price_per_area == 2789
        assert result.estimated_price == 2789 * 50
        assert result.rating == ValueRating.OVERPRICED
        assert result.comps_used == 3
        assert result.default_baseline_used is False

    def test_example_multipliers_recorded(self, engine, sarajevo_comps, create_target):
        """The result should carry every factor that was applied."""
        result = engine.estimate(create_target(), sarajevo_comps)

        assert result.multipliers == {
            "age": 1.15,
            "floor": 1.02,
            "size": 1.00,
            "condition": 1.15,
            "property_type": 1.00,
            "heating": 1.05,
            "equipment": 1.08,
            "orientation": 1.03,
            "amenities": 1.0,
        }

    def test_no_comparables_values_from_default(self, engine, sarajevo_comps, create_target):
        """A location without comparables is valued from the default baseline."""
        result = engine.estimate(create_target(location="Mostar"), sarajevo_comps)

        assert result.baseline_price_per_area == 1700.0
        assert result.default_baseline_used is True
        assert result.comps_used == 0
        assert result.estimated_price_per_area == round(1700.0 * 1.15 * 1.02 * 1.15 * 1.05 * 1.08 * 1.03)


# =============================================================================
# Test: Rounding & Determinism
# =============================================================================

class TestRoundingAndDeterminism:
    """Tests for the single rounding step and deterministic prices."""

    @pytest.mark.parametrize("area", [33.3, 47.5, 61.25, 99.9, 140.7])
    def test_price_is_rounded_price_per_area_times_area(
        self, engine, sarajevo_comps, create_target, area
    ):
        """Total price must be exactly price-per-area x area, no second rounding."""
        result = engine.estimate(create_target(area=area), sarajevo_comps)

        assert isinstance(result.estimated_price_per_area, int)
        assert result.estimated_price == result.estimated_price_per_area * area

    def test_identical_inputs_give_identical_prices(self, sarajevo_comps, create_target):
        """Price fields are deterministic; confidence may differ."""
        engine = ValuationEngine(reference_year=REFERENCE_YEAR)
        target = create_target(amenities=frozenset({Amenity.BALCONY, Amenity.GARAGE}))

        first = engine.estimate(target, sarajevo_comps)
        second = engine.estimate(target, sarajevo_comps)

        assert first.estimated_price == second.estimated_price
        assert first.estimated_price_per_area == second.estimated_price_per_area

    def test_confidence_within_bounds(self, engine, sarajevo_comps, create_target):
        """Confidence stays within the configured range."""
        for _ in range(50):
            result = engine.estimate(create_target(), sarajevo_comps)
            assert 65 <= result.confidence <= 90

    def test_confidence_does_not_affect_price(self, sarajevo_comps, create_target):
        """Different confidence sources must not change the price."""
        low = ValuationEngine(
            reference_year=REFERENCE_YEAR,
            confidence_estimator=ConfidenceEstimator(10, 10),
        )
        high = ValuationEngine(
            reference_year=REFERENCE_YEAR,
            confidence_estimator=ConfidenceEstimator(99, 99),
        )

        a = low.estimate(create_target(), sarajevo_comps)
        b = high.estimate(create_target(), sarajevo_comps)

        assert a.confidence == 10
        assert b.confidence == 99
        assert a.estimated_price == b.estimated_price


# =============================================================================
# Test: Pipeline Composition
# =============================================================================

class TestPipelineComposition:
    """The engine prices through the model's adjust()."""

    def test_price_per_area_is_rounded_adjust(self, engine, sarajevo_comps, create_target):
        target = create_target(amenities=frozenset({Amenity.BALCONY, Amenity.ELEVATOR}))
        baseline = select_baseline("Sarajevo", sarajevo_comps)

        result = engine.estimate(target, sarajevo_comps)

        assert result.estimated_price_per_area == round_half_up(engine.model.adjust(baseline, target))


# =============================================================================
# Test: Monotonicity
# =============================================================================

class TestMonotonicity:
    """Ordering properties of the estimate."""

    def test_larger_area_costs_more_at_same_price_per_area(
        self, engine, sarajevo_comps, create_target
    ):
        """Within one size band, more area means a strictly higher price."""
        small = engine.estimate(create_target(area=50), sarajevo_comps)
        large = engine.estimate(create_target(area=60), sarajevo_comps)

        assert small.estimated_price_per_area == large.estimated_price_per_area
        assert large.estimated_price > small.estimated_price

    def test_new_condition_not_below_needs_renovation(
        self, engine, sarajevo_comps, create_target
    ):
        """New condition must value at least as high as needs-renovation."""
        new = engine.estimate(create_target(condition=Condition.NEW), sarajevo_comps)
        worn = engine.estimate(
            create_target(condition=Condition.NEEDS_RENOVATION), sarajevo_comps
        )

        assert new.estimated_price_per_area >= worn.estimated_price_per_area


# =============================================================================
# Test: Error Handling
# =============================================================================

class TestErrorHandling:
    """Invalid input and unknown categories."""

    @pytest.mark.parametrize("area", [0, -10, float("nan")])
    def test_non_positive_area_rejected(self, create_target, area):
        with pytest.raises(InvalidInputError):
            create_target(area=area)

    def test_unknown_condition_rejected(self, create_target):
        with pytest.raises(UnknownCategoryError) as exc_info:
            create_target(condition="Slightly Haunted")

        assert exc_info.value.category == "Condition"
        assert exc_info.value.value == "Slightly Haunted"

    def test_form_labels_are_accepted(self, create_target):
        """Labels used by the listing form coerce to enum members."""
        target = create_target(
            condition="Newly Built",
            property_type="House",
            heating="Central Heating",
            equipment="Fully Furnished",
            orientation="South-West",
            amenities=["Garage", "RegisteredInLandRegistry", "VideoSurveillance"],
        )

        assert target.condition == Condition.NEW
        assert target.property_type == PropertyType.HOUSE
        assert target.heating == HeatingType.CENTRAL
        assert target.equipment == EquipmentLevel.FURNISHED
        assert target.orientation == Orientation.SOUTH_WEST
        assert target.amenities == frozenset(
            {Amenity.GARAGE, Amenity.REGISTERED, Amenity.VIDEO_SURVEILLANCE}
        )


# =============================================================================
# Test: Attribute Parsing
# =============================================================================

class TestFromDict:
    """TargetPropertyAttributes.from_dict."""

    def test_form_keys(self):
        """camelCase form keys map onto the attributes."""
        target = TargetPropertyAttributes.from_dict({
            "location": "Sarajevo",
            "municipality": "Centar",
            "m2": 72,
            "level": 3,
            "built": 2015,
            "condition": "Renovated",
            "typeOfProperty": "Apartment",
            "heatingType": "Gas",
            "equipment": "Semi-furnished",
            "orientation": "East",
            "additional": ["Elevator", "Balcony"],
            "parking": True,
        })

        assert target.area == 72.0
        assert target.year_built == 2015
        assert target.heating == HeatingType.GAS
        assert target.equipment == EquipmentLevel.SEMI_FURNISHED
        assert target.amenities == frozenset(
            {Amenity.ELEVATOR, Amenity.BALCONY, Amenity.PARKING_CIRCLE}
        )

    def test_missing_required_field(self):
        with pytest.raises(InvalidInputError, match="condition"):
            TargetPropertyAttributes.from_dict({
                "location": "Sarajevo",
                "area": 50,
                "year_built": 2000,
            })

    def test_module_level_entry_point(self, sarajevo_comps):
        """estimate_valuation works without an explicit engine."""
        target = TargetPropertyAttributes.from_dict({
            "location": "Sarajevo",
            "area": 50,
            "year_built": 1990,
            "condition": "good",
        })

        result = estimate_valuation(target, sarajevo_comps)

        assert result.estimated_price == result.estimated_price_per_area * 50
        assert result.to_dict()["rating"] == result.rating.label
