"""
Pure price math: sqrtPriceX96 -> scaled quotes -> display strings.
"""

from .calculator import (
    PRICE_DECIMALS,
    PRICE_SCALE,
    Q96,
    PriceQuote,
    calculate_prices,
    parse_sqrt_price,
)
from .formatter import format_price, format_units

__all__ = [
    "PRICE_DECIMALS",
    "PRICE_SCALE",
    "Q96",
    "PriceQuote",
    "calculate_prices",
    "parse_sqrt_price",
    "format_price",
    "format_units",
]
