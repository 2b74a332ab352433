"""
Tests for fixed-point amount formatting.
"""

import pytest

from swap_monitor.errors import FormatError
from swap_monitor.pricing import format_price, format_units
from swap_monitor.pricing.formatter import MAX_UINT256


class TestFormatUnits:
    """Test scaled integer rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1_500_000_000_000_000_000, "1.5 USDC"),
            (1_000_000_000_000_000_000, "1 USDC"),
            (1_234_567_000_000_000_000_000, "1,234.567 USDC"),
            (1, "0.000000000000000001 USDC"),
            (400_000_000_000_000, "0.0004 USDC"),
            (0, "0 USDC"),
            (1_000_000_000_000_000_000_000_000, "1,000,000 USDC"),
            (999_100_000_000_000_000_000, "999.1 USDC"),
        ],
    )
    def test_eighteen_decimals(self, value, expected):
        assert format_units(value, 18, "USDC") == expected

    def test_six_decimals(self):
        assert format_units(2_500_123_456, 6, "USDC") == "2,500.123456 USDC"

    def test_zero_decimals(self):
        assert format_units(1_234_567, 0, "WEI") == "1,234,567 WEI"

    def test_grouping_only_on_integer_part(self):
        result = format_units(1_234_567_891_234_567, 6, "X")

        assert result == "1,234,567,891.234567 X"
        assert "," not in result.split(".")[1]

    def test_max_uint256(self):
        result = format_units(MAX_UINT256, 18, "T")

        assert result.endswith(" T")
        assert not result.startswith("-")

    @pytest.mark.parametrize("value", [-1, MAX_UINT256 + 1, 1.5, "10", None, True])
    def test_invalid_value(self, value):
        with pytest.raises(FormatError):
            format_units(value, 18, "USDC")

    @pytest.mark.parametrize("decimals", [-1, 1.0, None])
    def test_invalid_decimals(self, decimals):
        with pytest.raises(FormatError):
            format_units(10, decimals, "USDC")


class TestFormatPrice:
    """Test 10^18-scaled price rendering."""

    def test_uses_price_scale(self):
        assert format_price(2_500 * 10**18, "USDC") == "2,500 USDC"
        assert format_price(4 * 10**14, "WETH") == "0.0004 WETH"
