"""
Data models for the Valuation Engine

Defines the target property attributes submitted for valuation, the
enumerated categories the multiplier table is keyed on, and the valuation
result returned to callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from core.errors import InvalidInputError, UnknownCategoryError, require_positive

from .rating import ValueRating


def _normalise(value: str) -> str:
    """Lower-case and collapse separators so form labels compare equal."""
    text = value.lower().strip()
    for separator in ("_", "-", "/"):
        text = text.replace(separator, " ")
    return " ".join(text.split())


# Form labels that differ from the canonical member values.
# Keys and targets are both normalised.
_ALIASES: Dict[str, Dict[str, str]] = {
    "Condition": {
        "newly built": "new",
        "new build": "new",
        "in good condition": "good",
    },
    "PropertyType": {
        "flat": "apartment",
        "commercial property": "commercial",
    },
    "HeatingType": {
        "central heating": "central",
        "electric heating": "electric",
        "floor heating": "floor",
    },
    "EquipmentLevel": {
        "fully furnished": "furnished",
    },
    "Orientation": {
        "n": "north",
        "s": "south",
        "e": "east",
        "w": "west",
        "ne": "north east",
        "nw": "north west",
        "se": "south east",
        "sw": "south west",
        "northeast": "north east",
        "northwest": "north west",
        "southeast": "south east",
        "southwest": "south west",
    },
    "Amenity": {
        "parkingcircle": "parking circle",
        "parking": "parking circle",
        "lift": "elevator",
        "videosurveillance": "video surveillance",
        "registeredinlandregistry": "registered",
        "registered in land registry": "registered",
        "land registry": "registered",
    },
}


class _CategoryEnum(Enum):
    """Enum with lenient, case-insensitive parsing of form labels."""

    @classmethod
    def from_string(cls, value):
        """
        Convert a string (or an existing member) to an enum member.

        Raises:
            UnknownCategoryError: if the value is not recognised
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownCategoryError(cls.__name__, value)

        normalised = _normalise(value)
        target = _ALIASES.get(cls.__name__, {}).get(normalised, normalised)
        for member in cls:
            if _normalise(member.value) == target:
                return member
        raise UnknownCategoryError(cls.__name__, value)


class Condition(_CategoryEnum):
    """Condition tier of the property."""
    NEW = "new"
    RENOVATED = "renovated"
    GOOD = "good"
    NEEDS_RENOVATION = "needs-renovation"


class PropertyType(_CategoryEnum):
    """Property type as offered by the listing form."""
    APARTMENT = "apartment"
    HOUSE = "house"
    STUDIO = "studio"
    COMMERCIAL = "commercial"
    OFFICE = "office"
    VACATION_HOME = "vacation-home"
    OTHER = "other"


class HeatingType(_CategoryEnum):
    """Heating system."""
    CENTRAL = "central"
    GAS = "gas"
    ELECTRIC = "electric"
    SOLID_FUEL = "solid-fuel"
    FLOOR = "floor"
    HEAT_PUMP = "heat-pump"
    OTHER = "other"


class EquipmentLevel(_CategoryEnum):
    """Furnishing level."""
    FURNISHED = "furnished"
    SEMI_FURNISHED = "semi-furnished"
    UNFURNISHED = "unfurnished"


class Orientation(_CategoryEnum):
    """Cardinal and intercardinal orientation of the main facade."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTH_EAST = "north-east"
    NORTH_WEST = "north-west"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"


class Amenity(_CategoryEnum):
    """Boolean amenity flags offered by the listing form."""
    GARAGE = "garage"
    PARKING_CIRCLE = "parking-circle"
    ELEVATOR = "elevator"
    BALCONY = "balcony"
    TERRACE = "terrace"
    ALARM = "alarm"
    VIDEO_SURVEILLANCE = "video-surveillance"
    REGISTERED = "registered"
    WATER = "water"
    ELECTRICITY = "electricity"
    GAS = "gas"
    INTERNET = "internet"


def parse_amenities(values: Optional[Iterable]) -> FrozenSet[Amenity]:
    """Parse an iterable of amenity labels into a frozenset of members."""
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(Amenity.from_string(v) for v in values)


@dataclass
class TargetPropertyAttributes:
    """
    The property being valued.

    Built per valuation request and discarded afterwards. Enumerated fields
    accept either enum members or their string labels; strings are coerced
    on construction and unknown labels raise UnknownCategoryError.
    """
    location: str
    area: float
    level: int
    year_built: int
    condition: Condition
    property_type: PropertyType = PropertyType.APARTMENT
    heating: HeatingType = HeatingType.OTHER
    equipment: EquipmentLevel = EquipmentLevel.UNFURNISHED
    orientation: Orientation = Orientation.EAST
    amenities: FrozenSet[Amenity] = field(default_factory=frozenset)

    # Map placement only
    municipality: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self):
        self.area = require_positive("area", self.area)
        self.condition = Condition.from_string(self.condition)
        self.property_type = PropertyType.from_string(self.property_type)
        self.heating = HeatingType.from_string(self.heating)
        self.equipment = EquipmentLevel.from_string(self.equipment)
        self.orientation = Orientation.from_string(self.orientation)
        self.amenities = parse_amenities(self.amenities)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TargetPropertyAttributes":
        """
        Build attributes from a JSON-style mapping.

        Accepts the snake_case field names as well as the camelCase keys of
        the listing form (``m2``, ``built``, ``typeOfProperty``,
        ``heatingType``, ``additional``, ``parking``).

        Raises:
            InvalidInputError: if a required field is missing
            UnknownCategoryError: if an enumerated value is not recognised
        """
        def pick(*keys, default=None):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        location = pick("location", "city")
        area = pick("area", "m2")
        year_built = pick("year_built", "built")
        condition = pick("condition")
        for name, value in (
            ("location", location),
            ("area", area),
            ("year_built", year_built),
            ("condition", condition),
        ):
            if value is None:
                raise InvalidInputError(f"Missing required field: {name}")

        amenities = set(parse_amenities(pick("amenities", "additional", default=[])))
        if pick("parking", default=False):
            amenities.add(Amenity.PARKING_CIRCLE)

        try:
            level = int(pick("level", "floor", default=0))
            year_built = int(year_built)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"level and year_built must be integers: {e}")

        return cls(
            location=location,
            area=area,
            level=level,
            year_built=year_built,
            condition=condition,
            property_type=pick("property_type", "typeOfProperty", default=PropertyType.APARTMENT),
            heating=pick("heating", "heatingType", default=HeatingType.OTHER),
            equipment=pick("equipment", default=EquipmentLevel.UNFURNISHED),
            orientation=pick("orientation", default=Orientation.EAST),
            amenities=frozenset(amenities),
            municipality=pick("municipality", default=""),
            latitude=pick("latitude", "lat"),
            longitude=pick("longitude", "lng", "lon"),
        )


@dataclass
class ValuationResult:
    """
    Valuation produced for one request.

    ``estimated_price`` is always ``estimated_price_per_area * area``; the
    price-per-area is the only value that is rounded.
    """
    estimated_price: float
    estimated_price_per_area: int
    confidence: int
    rating: ValueRating

    # Audit trail
    baseline_price_per_area: float = 0.0
    comps_used: int = 0
    default_baseline_used: bool = False
    multipliers: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "estimated_price": self.estimated_price,
            "estimated_price_per_area": self.estimated_price_per_area,
            "confidence": self.confidence,
            "rating": self.rating.label,
            "rating_color": self.rating.color,
            "baseline_price_per_area": round(self.baseline_price_per_area, 2),
            "comps_used": self.comps_used,
            "default_baseline_used": self.default_baseline_used,
            "multipliers": dict(self.multipliers),
        }
