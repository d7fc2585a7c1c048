"""
Listing model for the Listing Store.

Listings are immutable reference data: comparables for valuation and the
rows behind search/browse screens.
"""

from dataclasses import dataclass
from typing import Optional

from core.errors import require_positive


@dataclass(frozen=True)
class Listing:
    """
    A known property listing.

    ``price_per_area`` is always derived from ``price / area`` so the two
    can never drift apart.
    """
    id: str
    title: str
    city: str  # Canonical location key for comparable matching
    area: float  # m2
    floor: int
    year_built: int
    price: float  # BAM

    municipality: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self):
        require_positive("area", self.area)
        require_positive("price", self.price)

    @property
    def price_per_area(self) -> float:
        """Price per square metre."""
        return self.price / self.area

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "title": self.title,
            "city": self.city,
            "municipality": self.municipality,
            "area": self.area,
            "floor": self.floor,
            "year_built": self.year_built,
            "price": self.price,
            "price_per_area": round(self.price_per_area, 2),
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
