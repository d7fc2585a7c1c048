"""
Comparable Selector for the Valuation Engine

Selects the comparable listings for a target location and derives the
baseline price-per-area the feature multipliers are applied to.

Location matching is an exact string match on ``Listing.city``. There is no
fuzzy matching; a location with no comparables falls back to the configured
default baseline.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from core.listings.models import Listing


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

# Citywide reference price-per-area (BAM/m2) used when a location has no
# comparables. Overridable through Config.default_baseline_ppa.
DEFAULT_BASELINE_PRICE_PER_AREA = 1700.0


@dataclass
class BaselineSelection:
    """Baseline price-per-area and the comparables it was derived from."""
    baseline: float
    comps: List[Listing] = field(default_factory=list)
    default_used: bool = False

    @property
    def comp_count(self) -> int:
        return len(self.comps)


class ComparableSelector:
    """Exact-location comparable selection with a documented default baseline."""

    def __init__(self, default_baseline: float = DEFAULT_BASELINE_PRICE_PER_AREA):
        self._default_baseline = float(default_baseline)

    @property
    def default_baseline(self) -> float:
        return self._default_baseline

    def select(self, location: str, listings: Iterable[Listing]) -> List[Listing]:
        """Listings whose city matches ``location`` exactly, in input order."""
        return [listing for listing in listings if listing.city == location]

    def select_baseline(
        self,
        location: str,
        listings: Iterable[Listing],
    ) -> BaselineSelection:
        """
        Derive the baseline price-per-area for a location.

        Args:
            location: Target location (matched against Listing.city)
            listings: Candidate comparables

        Returns:
            BaselineSelection with the arithmetic mean price-per-area of the
            matching comparables, or the default baseline when none match
        """
        comps = self.select(location, listings)

        if not comps:
            logger.debug(
                "No comparables for %r; using default baseline %.2f",
                location,
                self._default_baseline,
            )
            return BaselineSelection(
                baseline=self._default_baseline,
                comps=[],
                default_used=True,
            )

        mean = sum(c.price_per_area for c in comps) / len(comps)
        return BaselineSelection(baseline=mean, comps=comps, default_used=False)


def select_baseline(
    location: str,
    listings: Iterable[Listing],
    default_baseline: float = DEFAULT_BASELINE_PRICE_PER_AREA,
) -> float:
    """Baseline price-per-area for ``location`` (see ComparableSelector)."""
    return ComparableSelector(default_baseline).select_baseline(location, listings).baseline
