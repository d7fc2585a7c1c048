"""
Formatting utilities.
"""


def format_currency(amount: float, currency: str = "BAM") -> str:
    """
    Format an amount as currency, rounded to whole units.

    Args:
        amount: The amount in whole units (e.g., marks, not fenings).
        currency: Currency code (default BAM, the convertible mark).

    Returns:
        Formatted currency string.
    """
    symbols = {
        "GBP": "£",
        "USD": "$",
        "EUR": "€",
    }
    whole = int(round(amount))
    if currency in symbols:
        return f"{symbols[currency]}{whole:,}"
    return f"{whole:,} {currency}"


def format_price_per_area(amount: float, currency: str = "BAM") -> str:
    """Format a price per square metre, e.g. ``1,888 BAM/m²``."""
    return f"{format_currency(amount, currency)}/m²"


def format_percent(value: float, decimals: int = 1) -> str:
    """Format a percentage, e.g. a confidence figure or a price change."""
    return f"{value:.{decimals}f}%"
