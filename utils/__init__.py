"""
Utility modules for the valuation engine.
"""

from .formatting import format_currency, format_percent, format_price_per_area
from .config import Config

__all__ = ["format_currency", "format_percent", "format_price_per_area", "Config"]
