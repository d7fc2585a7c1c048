"""
Feature Multiplier Model for the Valuation Engine

Adjusts a baseline price-per-area by a fixed table of independent
multiplicative factors:

    adjusted = baseline
        x age x floor x size x condition x type
        x heating x equipment x orientation
        x (1 + sum of amenity bonuses)

A single MultiplierTable is shared by every call site. The default table can
be overridden from JSON, but overrides must keep the relative ordering of the
defaults (see MultiplierTable.validate).

The model is deterministic: no randomness, no rounding. Rounding happens once,
on the composed price-per-area, via round_half_up.
"""

import json
import math
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from core.errors import UnknownCategoryError

from .models import (
    Amenity,
    Condition,
    EquipmentLevel,
    HeatingType,
    Orientation,
    PropertyType,
    TargetPropertyAttributes,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Default Table
# =============================================================================

# (exclusive upper age bound in years, multiplier), checked in order
DEFAULT_AGE_BANDS: Tuple[Tuple[int, float], ...] = (
    (5, 1.15),
    (15, 1.05),
    (30, 0.95),
)
DEFAULT_AGE_FALLBACK = 0.85

DEFAULT_CONDITION_FACTORS: Dict[Condition, float] = {
    Condition.NEW: 1.15,
    Condition.RENOVATED: 1.08,
    Condition.GOOD: 1.00,
    Condition.NEEDS_RENOVATION: 0.90,
}

DEFAULT_TYPE_FACTORS: Dict[PropertyType, float] = {
    PropertyType.HOUSE: 1.10,
    PropertyType.APARTMENT: 1.00,
    PropertyType.STUDIO: 0.95,
    PropertyType.COMMERCIAL: 0.95,
    PropertyType.OFFICE: 0.95,
    PropertyType.VACATION_HOME: 0.95,
    PropertyType.OTHER: 0.95,
}

DEFAULT_HEATING_FACTORS: Dict[HeatingType, float] = {
    HeatingType.CENTRAL: 1.05,
    HeatingType.GAS: 1.03,
    HeatingType.ELECTRIC: 1.00,
    HeatingType.SOLID_FUEL: 1.00,
    HeatingType.FLOOR: 1.00,
    HeatingType.HEAT_PUMP: 1.00,
    HeatingType.OTHER: 1.00,
}

DEFAULT_EQUIPMENT_FACTORS: Dict[EquipmentLevel, float] = {
    EquipmentLevel.FURNISHED: 1.08,
    EquipmentLevel.SEMI_FURNISHED: 1.03,
    EquipmentLevel.UNFURNISHED: 1.00,
}

# Intercardinal facades follow their north/south component
DEFAULT_ORIENTATION_FACTORS: Dict[Orientation, float] = {
    Orientation.SOUTH: 1.03,
    Orientation.SOUTH_EAST: 1.03,
    Orientation.SOUTH_WEST: 1.03,
    Orientation.EAST: 1.00,
    Orientation.WEST: 1.00,
    Orientation.NORTH: 0.97,
    Orientation.NORTH_EAST: 0.97,
    Orientation.NORTH_WEST: 0.97,
}

# Garage and parking circle share one bonus (PARKING_BONUS), counted once
DEFAULT_AMENITY_BONUSES: Dict[Amenity, float] = {
    Amenity.ELEVATOR: 0.02,
    Amenity.BALCONY: 0.02,
    Amenity.TERRACE: 0.03,
    Amenity.ALARM: 0.01,
    Amenity.VIDEO_SURVEILLANCE: 0.01,
    Amenity.REGISTERED: 0.02,
    Amenity.WATER: 0.0,
    Amenity.ELECTRICITY: 0.0,
    Amenity.GAS: 0.0,
    Amenity.INTERNET: 0.0,
}
DEFAULT_PARKING_BONUS = 0.03
PARKING_AMENITIES = frozenset({Amenity.GARAGE, Amenity.PARKING_CIRCLE})


@dataclass(frozen=True)
class MultiplierTable:
    """Lookup table of every factor the model composes."""
    age_bands: Tuple[Tuple[int, float], ...] = DEFAULT_AGE_BANDS
    age_fallback: float = DEFAULT_AGE_FALLBACK

    floor_range: Tuple[int, int] = (1, 4)  # inclusive
    floor_in_range: float = 1.02
    floor_out_of_range: float = 0.98

    small_area_below: float = 40.0
    large_area_above: float = 100.0
    small_area_factor: float = 1.10
    standard_area_factor: float = 1.00
    large_area_factor: float = 0.95

    condition: Mapping[Condition, float] = field(
        default_factory=lambda: dict(DEFAULT_CONDITION_FACTORS)
    )
    property_type: Mapping[PropertyType, float] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_FACTORS)
    )
    heating: Mapping[HeatingType, float] = field(
        default_factory=lambda: dict(DEFAULT_HEATING_FACTORS)
    )
    equipment: Mapping[EquipmentLevel, float] = field(
        default_factory=lambda: dict(DEFAULT_EQUIPMENT_FACTORS)
    )
    orientation: Mapping[Orientation, float] = field(
        default_factory=lambda: dict(DEFAULT_ORIENTATION_FACTORS)
    )
    amenity_bonuses: Mapping[Amenity, float] = field(
        default_factory=lambda: dict(DEFAULT_AMENITY_BONUSES)
    )
    parking_bonus: float = DEFAULT_PARKING_BONUS

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MultiplierTable":
        """
        Build a table from a JSON-style mapping layered over the defaults.

        Category sections are keyed by label (``{"condition": {"new": 1.2}}``)
        and only override the entries they name. The result is validated.

        Raises:
            UnknownCategoryError: if a category label is not recognised
            ValueError: if the table breaks the default ordering
        """
        table = cls()
        overrides: Dict[str, Any] = {}

        if "age_bands" in data:
            overrides["age_bands"] = tuple(
                (int(bound), float(factor)) for bound, factor in data["age_bands"]
            )
        if "floor_range" in data:
            low, high = data["floor_range"]
            overrides["floor_range"] = (int(low), int(high))

        for name in (
            "age_fallback",
            "floor_in_range",
            "floor_out_of_range",
            "small_area_below",
            "large_area_above",
            "small_area_factor",
            "standard_area_factor",
            "large_area_factor",
            "parking_bonus",
        ):
            if name in data:
                overrides[name] = float(data[name])

        for name, enum_cls in (
            ("condition", Condition),
            ("property_type", PropertyType),
            ("heating", HeatingType),
            ("equipment", EquipmentLevel),
            ("orientation", Orientation),
            ("amenity_bonuses", Amenity),
        ):
            if name in data:
                merged = dict(getattr(table, name))
                for label, factor in data[name].items():
                    merged[enum_cls.from_string(label)] = float(factor)
                overrides[name] = merged

        table = replace(table, **overrides)
        table.validate()
        return table

    @classmethod
    def from_json_file(cls, path) -> "MultiplierTable":
        """Load a table override from a JSON file."""
        with open(Path(path), "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check the table keeps the relative ordering of the default factors.

        Raises:
            ValueError: listing every ordering the table violates
        """
        errors = []

        def ordered(name: str, *values: float) -> None:
            if any(a < b for a, b in zip(values, values[1:])):
                errors.append(f"{name} factors must be non-increasing: {values}")

        factors = [f for _, f in self.age_bands] + [self.age_fallback]
        bounds = [b for b, _ in self.age_bands]
        if bounds != sorted(bounds):
            errors.append(f"age band bounds must be ascending: {bounds}")
        ordered("age", *factors)
        ordered("floor", self.floor_in_range, self.floor_out_of_range)
        ordered("size", self.small_area_factor, self.standard_area_factor, self.large_area_factor)
        if self.small_area_below > self.large_area_above:
            errors.append("small_area_below must not exceed large_area_above")

        c = self.condition
        ordered(
            "condition",
            c[Condition.NEW], c[Condition.RENOVATED],
            c[Condition.GOOD], c[Condition.NEEDS_RENOVATION],
        )

        t = self.property_type
        others = [v for k, v in t.items() if k not in (PropertyType.HOUSE, PropertyType.APARTMENT)]
        ordered("property_type", t[PropertyType.HOUSE], t[PropertyType.APARTMENT], max(others, default=0.0))

        h = self.heating
        others = [v for k, v in h.items() if k not in (HeatingType.CENTRAL, HeatingType.GAS)]
        ordered("heating", h[HeatingType.CENTRAL], h[HeatingType.GAS], max(others, default=0.0))

        e = self.equipment
        ordered(
            "equipment",
            e[EquipmentLevel.FURNISHED], e[EquipmentLevel.SEMI_FURNISHED],
            e[EquipmentLevel.UNFURNISHED],
        )

        o = self.orientation
        ordered("orientation", o[Orientation.SOUTH], o[Orientation.EAST], o[Orientation.NORTH])
        ordered("orientation", o[Orientation.SOUTH], o[Orientation.WEST], o[Orientation.NORTH])

        multipliers = (
            factors
            + [self.floor_in_range, self.floor_out_of_range]
            + [self.small_area_factor, self.standard_area_factor, self.large_area_factor]
            + list(c.values()) + list(t.values()) + list(h.values())
            + list(e.values()) + list(o.values())
        )
        if any(m <= 0 for m in multipliers):
            errors.append("all multipliers must be positive")
        if any(b < 0 for b in self.amenity_bonuses.values()) or self.parking_bonus < 0:
            errors.append("amenity bonuses must be non-negative")

        if errors:
            raise ValueError("Invalid multiplier table: " + "; ".join(errors))


DEFAULT_MULTIPLIER_TABLE = MultiplierTable()


class FeatureMultiplierModel:
    """
    Applies the multiplier table to a baseline price-per-area.

    Factor order:
    1. Age (reference year - year built)
    2. Floor / level
    3. Size
    4. Condition
    5. Property type
    6. Heating
    7. Equipment
    8. Orientation
    9. Amenities, as (1 + summed bonuses)
    """

    def __init__(
        self,
        table: MultiplierTable = DEFAULT_MULTIPLIER_TABLE,
        reference_year: Optional[int] = None,
    ):
        """
        Args:
            table: Multiplier table to apply
            reference_year: Year property age is measured from (default: this year)
        """
        self._table = table
        self._reference_year = reference_year or date.today().year

    @property
    def table(self) -> MultiplierTable:
        return self._table

    @property
    def reference_year(self) -> int:
        return self._reference_year

    def adjust(
        self,
        baseline: float,
        attrs: TargetPropertyAttributes,
        factors: Optional[Dict[str, float]] = None,
    ) -> float:
        """
        Compose every factor onto the baseline.

        Args:
            baseline: Baseline price-per-area
            attrs: Target property attributes
            factors: A breakdown already computed for ``attrs``

        Returns:
            Adjusted price-per-area, unrounded
        """
        if factors is None:
            factors = self.breakdown(attrs)
        adjusted = baseline
        for factor in factors.values():
            adjusted *= factor
        return adjusted

    def breakdown(self, attrs: TargetPropertyAttributes) -> Dict[str, float]:
        """Every factor applied for ``attrs``, in composition order."""
        return {
            "age": self.age_factor(attrs.year_built),
            "floor": self.floor_factor(attrs.level),
            "size": self.size_factor(attrs.area),
            "condition": self._lookup("condition", self._table.condition, attrs.condition),
            "property_type": self._lookup("property type", self._table.property_type, attrs.property_type),
            "heating": self._lookup("heating", self._table.heating, attrs.heating),
            "equipment": self._lookup("equipment", self._table.equipment, attrs.equipment),
            "orientation": self._lookup("orientation", self._table.orientation, attrs.orientation),
            "amenities": 1 + self.amenity_bonus(attrs.amenities),
        }

    def age_factor(self, year_built: int) -> float:
        age = self._reference_year - year_built
        for upper_bound, factor in self._table.age_bands:
            if age < upper_bound:
                return factor
        return self._table.age_fallback

    def floor_factor(self, level: int) -> float:
        low, high = self._table.floor_range
        if low <= level <= high:
            return self._table.floor_in_range
        return self._table.floor_out_of_range

    def size_factor(self, area: float) -> float:
        if area < self._table.small_area_below:
            return self._table.small_area_factor
        if area > self._table.large_area_above:
            return self._table.large_area_factor
        return self._table.standard_area_factor

    def amenity_bonus(self, amenities) -> float:
        """Summed bonus; garage and parking circle count once together."""
        total = 0.0
        if amenities & PARKING_AMENITIES:
            total += self._table.parking_bonus
        # Fixed summation order keeps the float result identical across runs
        for amenity in sorted(amenities, key=lambda a: a.value):
            if amenity in PARKING_AMENITIES:
                continue
            total += self._lookup("amenity", self._table.amenity_bonuses, amenity)
        return total

    @staticmethod
    def _lookup(category: str, table: Mapping, key) -> float:
        try:
            return table[key]
        except KeyError:
            raise UnknownCategoryError(category, key)
