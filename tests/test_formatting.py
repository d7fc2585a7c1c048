"""
Tests for report formatting helpers
"""

from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.formatting import format_currency, format_percent, format_price_per_area


class TestFormatting:

    def test_bam_suffix(self):
        assert format_currency(144500) == "144,500 BAM"

    def test_symbol_prefix(self):
        assert format_currency(1250.4, "EUR") == "€1,250"

    def test_price_per_area(self):
        assert format_price_per_area(1888.89) == "1,889 BAM/m²"

    def test_percent(self):
        assert format_percent(78, 0) == "78%"
        assert format_percent(12.345) == "12.3%"
