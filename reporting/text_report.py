"""
Plain-text reports for valuations and listing searches.
"""

from typing import Iterable, List

from core.listings import Listing
from core.valuation import TargetPropertyAttributes, ValuationResult
from utils.formatting import format_currency, format_percent, format_price_per_area


RULE = "-" * 60


def render_valuation(target: TargetPropertyAttributes, result: ValuationResult) -> str:
    """
    Render a valuation as a short report.

    The confidence figure is labelled as indicative; it is not a statistical
    interval.
    """
    lines = [
        "FAIR PRICE ESTIMATE",
        RULE,
        f"Location:          {target.location}"
        + (f" / {target.municipality}" if target.municipality else ""),
        f"Area:              {target.area:g} m²",
        f"Level:             {target.level}",
        f"Year built:        {target.year_built}",
        f"Condition:         {target.condition.value}",
        RULE,
        f"Estimated price:   {format_currency(result.estimated_price)}",
        f"Price per m²:      {format_price_per_area(result.estimated_price_per_area)}",
        f"Value rating:      {result.rating.label}",
        f"Confidence:        {format_percent(result.confidence, 0)} (indicative)",
        RULE,
    ]

    if result.default_baseline_used:
        lines.append(
            f"Baseline:          {format_price_per_area(result.baseline_price_per_area)}"
            " (citywide default, no comparables)"
        )
    else:
        lines.append(
            f"Baseline:          {format_price_per_area(result.baseline_price_per_area)}"
            f" from {result.comps_used} comparable(s)"
        )

    lines.append("Adjustments:")
    for name, factor in result.multipliers.items():
        lines.append(f"  {name:<15} x{factor:.2f}")

    return "\n".join(lines)


def render_listings(listings: Iterable[Listing], title: str = "LISTINGS") -> str:
    """Render listings as one line each, in the given order."""
    rows: List[str] = [title, RULE]
    count = 0
    for listing in listings:
        count += 1
        rows.append(
            f"[{listing.id}] {listing.title} | {listing.city} | {listing.area:g} m² | "
            f"{format_currency(listing.price)} | {format_price_per_area(listing.price_per_area)}"
        )
    if count == 0:
        rows.append("No listings match the criteria.")
    rows.append(RULE)
    rows.append(f"{count} listing(s)")
    return "\n".join(rows)
