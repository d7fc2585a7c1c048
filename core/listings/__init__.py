"""
Listing Store and Listing Filter.

Read-only reference listings used as valuation comparables and for the
search/browse screens.
"""

from .models import Listing
from .store import ListingStore, DEMO_LISTING_RECORDS, listing_from_record
from .filters import (
    ListingFilter,
    SearchCriteria,
    UNDERVALUED_THRESHOLD,
    search_listings,
    undervalued_listings,
)

__all__ = [
    "Listing",
    "ListingStore",
    "DEMO_LISTING_RECORDS",
    "listing_from_record",
    "ListingFilter",
    "SearchCriteria",
    "UNDERVALUED_THRESHOLD",
    "search_listings",
    "undervalued_listings",
]
