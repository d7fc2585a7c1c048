"""
Listing Filter

Search/browse filtering over the Listing Store. Independent of the valuation
pipeline.

All predicates are conjunctive and results keep store order, so filtering
twice with the same criteria returns the same list.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.valuation.rating import GOOD_VALUE_CEILING

from .models import Listing


# Listings below this price-per-area are flagged as undervalued deals.
# Shares the Good Value ceiling of the value rating tiers.
UNDERVALUED_THRESHOLD = GOOD_VALUE_CEILING


@dataclass
class SearchCriteria:
    """Search parameters for browsing listings."""
    text_query: str = ""
    city: Optional[str] = None
    min_area: Optional[float] = None  # inclusive
    max_area: Optional[float] = None  # inclusive


class ListingFilter:
    """
    Applies search criteria to listings.

    A listing must pass ALL predicates to be returned.
    """

    def filter(
        self,
        listings: Iterable[Listing],
        criteria: SearchCriteria,
    ) -> List[Listing]:
        """
        Filter listings by city, area range and title text.

        Args:
            listings: Listings to search, in store order
            criteria: Search parameters

        Returns:
            Matching listings in their original order
        """
        return [l for l in listings if self.matches(l, criteria)]

    def matches(self, listing: Listing, criteria: SearchCriteria) -> bool:
        """Whether a single listing satisfies every predicate."""
        # City must match exactly when given
        if criteria.city and listing.city != criteria.city:
            return False

        # Area range, inclusive on both bounds
        if criteria.min_area is not None and listing.area < criteria.min_area:
            return False
        if criteria.max_area is not None and listing.area > criteria.max_area:
            return False

        # Case-insensitive title substring
        query = (criteria.text_query or "").lower()
        if query and query not in listing.title.lower():
            return False

        return True

    def undervalued(self, listings: Iterable[Listing]) -> List[Listing]:
        """Listings priced below the undervalued threshold per m2."""
        return [l for l in listings if l.price_per_area < UNDERVALUED_THRESHOLD]


def search_listings(
    listings: Iterable[Listing],
    criteria: SearchCriteria,
) -> List[Listing]:
    """Filter ``listings`` by ``criteria`` (see ListingFilter.filter)."""
    return ListingFilter().filter(listings, criteria)


def undervalued_listings(listings: Iterable[Listing]) -> List[Listing]:
    """Listings below the undervalued price-per-area threshold."""
    return ListingFilter().undervalued(listings)
