"""
Reporting module for RealEstate IQ.

Plain-text valuation and listing reports, and the command-line interface.

Usage:
    from reporting import render_valuation

    result = engine.estimate(target, store)
    print(render_valuation(target, result))
"""

from .text_report import render_listings, render_valuation

__all__ = [
    "render_listings",
    "render_valuation",
]
