"""
Listing Store

Read-only set of known listings, loaded once per process and shared by the
valuation pipeline (as comparables) and the search screens.

Source records may carry a stored price-per-area. It is never trusted:
``Listing.price_per_area`` is recomputed from price and area, and a stored
value that disagrees by more than one currency unit is logged and dropped.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from core.errors import InvalidInputError

from .models import Listing


logger = logging.getLogger(__name__)


# Allowed gap between a stored and a recomputed price-per-area (BAM/m2)
PRICE_PER_AREA_TOLERANCE = 1.0


# =============================================================================
# Demo Listings (Bosnia & Herzegovina, prices in BAM)
# =============================================================================

DEMO_LISTING_RECORDS: Tuple[dict, ...] = (
    {
        "id": "p1",
        "title": "1-bedroom apartment - Ilidža",
        "city": "Sarajevo",
        "municipality": "Ilidza",
        "m2": 45,
        "floor": 2,
        "built": 2005,
        "price": 85000,
        "pricePerM2": 1888,
        "lat": 43.8297,
        "lng": 18.3108,
    },
    {
        "id": "p2",
        "title": "2-bedroom - Centar",
        "city": "Sarajevo",
        "municipality": "Centar",
        "m2": 65,
        "floor": 3,
        "built": 1998,
        "price": 125000,
        "pricePerM2": 1923,
        "lat": 43.8590,
        "lng": 18.4214,
    },
    {
        "id": "p3",
        "title": "Studio - Ilidža (renovated)",
        "city": "Sarajevo",
        "municipality": "Ilidza",
        "m2": 28,
        "floor": 1,
        "built": 2010,
        "price": 42000,
        "pricePerM2": 1500,
        "lat": 43.8311,
        "lng": 18.3032,
    },
    {
        "id": "p4",
        "title": "3-bedroom family apartment - Novi Grad",
        "city": "Doboj",
        "m2": 95,
        "floor": 4,
        "built": 1985,
        "price": 95000,
        "pricePerM2": 1000,
        "lat": 44.7319,
        "lng": 18.0844,
    },
    {
        "id": "p5",
        "title": "2-bedroom apartment - Novo Sarajevo",
        "city": "Sarajevo",
        "municipality": "Novo Sarajevo",
        "m2": 58,
        "floor": 5,
        "built": 2016,
        "price": 110200,
        "lat": 43.8501,
        "lng": 18.3897,
    },
    {
        "id": "p6",
        "title": "Family house with garden - Bijeli Brijeg",
        "city": "Mostar",
        "m2": 140,
        "floor": 0,
        "built": 2001,
        "price": 182000,
        "lat": 43.3494,
        "lng": 17.8019,
    },
    {
        "id": "p7",
        "title": "Studio near the Old Bridge",
        "city": "Mostar",
        "m2": 32,
        "floor": 1,
        "built": 1975,
        "price": 57600,
        "lat": 43.3373,
        "lng": 17.8150,
    },
    {
        "id": "p8",
        "title": "3-bedroom apartment - Borik",
        "city": "Banja Luka",
        "m2": 82,
        "floor": 3,
        "built": 2012,
        "price": 131200,
        "lat": 44.7789,
        "lng": 17.2098,
    },
)


def listing_from_record(record: Mapping[str, Any]) -> Listing:
    """
    Build a Listing from a raw record.

    Accepts the snake_case field names or the compact keys used by the demo
    data (``m2``, ``built``, ``pricePerM2``, ``lat``, ``lng``).

    Raises:
        InvalidInputError: if a required field is missing or area/price are
            not positive
    """
    def pick(*keys, default=None):
        for key in keys:
            if record.get(key) is not None:
                return record[key]
        return default

    listing_id = pick("id")
    if listing_id is None:
        raise InvalidInputError("Listing record is missing 'id'")

    try:
        listing = Listing(
            id=str(listing_id),
            title=pick("title", default=""),
            city=pick("city", default=""),
            area=float(pick("area", "m2", default=0)),
            floor=int(pick("floor", "level", default=0)),
            year_built=int(pick("year_built", "built", default=0)),
            price=float(pick("price", default=0)),
            municipality=pick("municipality", default=""),
            latitude=pick("latitude", "lat"),
            longitude=pick("longitude", "lng", "lon"),
        )
    except InvalidInputError as e:
        raise InvalidInputError(f"Listing {listing_id}: {e}")
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Listing {listing_id} has a malformed field: {e}")

    stored = pick("price_per_area", "pricePerM2")
    if stored is not None:
        try:
            stored = float(stored)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Listing {listing_id} has a malformed field: {e}")
    if stored is not None and abs(stored - listing.price_per_area) > PRICE_PER_AREA_TOLERANCE:
        logger.warning(
            "Listing %s stored price-per-area %s disagrees with price/area %.2f; using recomputed value",
            listing.id,
            stored,
            listing.price_per_area,
        )

    return listing


class ListingStore:
    """
    Immutable collection of listings.

    Iteration order is the load order and is preserved by every query.
    """

    def __init__(self, listings: Iterable[Listing] = ()):
        self._listings: Tuple[Listing, ...] = tuple(listings)
        self._by_id = {}
        for listing in self._listings:
            if listing.id in self._by_id:
                raise InvalidInputError(f"Duplicate listing id: {listing.id}")
            self._by_id[listing.id] = listing

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ListingStore":
        """Build a store from raw records, normalising each one."""
        return cls(listing_from_record(r) for r in records)

    @classmethod
    def from_json_file(cls, path) -> "ListingStore":
        """Load a store from a JSON file holding a list of records."""
        with open(Path(path), "r", encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise InvalidInputError(f"{path}: expected a JSON list of listings")
        store = cls.from_records(records)
        logger.info("Loaded %d listings from %s", len(store), path)
        return store

    @classmethod
    def demo(cls) -> "ListingStore":
        """The built-in demo listing set."""
        return cls.from_records(DEMO_LISTING_RECORDS)

    def __len__(self) -> int:
        return len(self._listings)

    def __iter__(self) -> Iterator[Listing]:
        return iter(self._listings)

    @property
    def listings(self) -> List[Listing]:
        """All listings, in load order (a fresh list each call)."""
        return list(self._listings)

    def get(self, listing_id: str) -> Optional[Listing]:
        """Look up a listing by id."""
        return self._by_id.get(listing_id)

    def cities(self) -> List[str]:
        """Distinct cities, in first-seen order."""
        seen = []
        for listing in self._listings:
            if listing.city not in seen:
                seen.append(listing.city)
        return seen
