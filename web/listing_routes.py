"""
Listing Routes - Search and Browse API

Read-only access to the Listing Store: filtered search, undervalued deals
and single-listing lookup.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from core.listings import ListingStore, SearchCriteria, search_listings, undervalued_listings


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/listings", tags=["listings"])


def get_store(request: Request) -> ListingStore:
    """Listing store loaded at app creation."""
    return request.app.state.store


# =============================================================================
# Routes
# =============================================================================


@router.get("")
async def search(
    q: str = Query("", description="Case-insensitive title search"),
    city: Optional[str] = Query(None),
    min_area: Optional[float] = Query(None, ge=0),
    max_area: Optional[float] = Query(None, ge=0),
    store: ListingStore = Depends(get_store),
):
    """Search listings by title text, city and area range."""
    criteria = SearchCriteria(text_query=q, city=city, min_area=min_area, max_area=max_area)
    results = search_listings(store, criteria)
    return {
        "count": len(results),
        "listings": [l.to_dict() for l in results],
    }


@router.get("/undervalued")
async def undervalued(store: ListingStore = Depends(get_store)):
    """Listings priced below the undervalued price-per-area threshold."""
    results = undervalued_listings(store)
    return {
        "count": len(results),
        "listings": [l.to_dict() for l in results],
    }


@router.get("/{listing_id}")
async def get_listing(listing_id: str, store: ListingStore = Depends(get_store)):
    """Single listing by id."""
    listing = store.get(listing_id)
    if listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing.to_dict()
