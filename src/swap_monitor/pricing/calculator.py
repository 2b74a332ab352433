"""
Price derivation from Uniswap V3 sqrtPriceX96 samples.

Key concepts:
- sqrtPriceX96: square root of the raw token1/token0 price in Q96 fixed-point
  format, i.e. sqrt(price) * 2^96
- Raw price: token1 base units per token0 base unit
- Human price: raw price shifted by the difference in token decimals

All arithmetic is exact (fractions.Fraction) until the final floor
truncation to an integer scaled by 10^18.
"""

import logging
from fractions import Fraction
from typing import NamedTuple, Union

from ..errors import CalculationError, ParseError

logger = logging.getLogger(__name__)

# Q96 constants
Q96 = 2**96

PRICE_DECIMALS = 18
PRICE_SCALE = 10**PRICE_DECIMALS

MAX_TOKEN_DECIMALS = 255


class PriceQuote(NamedTuple):
    """Both directions of a pool price, each scaled by 10^18."""

    price0_in_1: int  # units of token1 for one token0
    price1_in_0: int  # units of token0 for one token1


def parse_sqrt_price(value: Union[str, int]) -> int:
    """
    Parse a sqrtPriceX96 sample into a non-negative integer.

    Args:
        value: Decimal numeral string (ASCII digits only) or int

    Returns:
        The sample as an int

    Raises:
        ParseError: If the value is not a non-negative decimal integer
    """
    if isinstance(value, bool):
        raise ParseError(f"Invalid sqrt price sample: {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise ParseError(f"Negative sqrt price sample: {value}")
        return value

    if not isinstance(value, str) or not value or not (value.isascii() and value.isdigit()):
        raise ParseError(f"Invalid sqrt price sample: {value!r}")

    return int(value)


def _validate_decimals(decimals: int, symbol: str) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise CalculationError(f"Token decimals must be an integer, got {decimals!r} for {symbol or 'token'}")
    if not 0 <= decimals <= MAX_TOKEN_DECIMALS:
        raise CalculationError(
            f"Token decimals out of range [0, {MAX_TOKEN_DECIMALS}]: {decimals} for {symbol or 'token'}"
        )


def calculate_prices(
    sqrt_price_x96: Union[str, int],
    decimals0: int,
    decimals1: int,
    symbol0: str = "",
    symbol1: str = "",
) -> PriceQuote:
    """
    Reverse sqrtPriceX96 into the prices of both tokens.

    Formula:
        ratio       = (sqrtPriceX96 / 2^96)^2
        price0_in_1 = ratio / 10^(decimals1 - decimals0)
        price1_in_0 = 1 / price0_in_1

    Args:
        sqrt_price_x96: sqrtPriceX96 sample as a decimal numeral string
        decimals0: token0 decimals
        decimals1: token1 decimals
        symbol0: token0 symbol, only used for error context
        symbol1: token1 symbol, only used for error context

    Returns:
        PriceQuote with both prices scaled by 10^18 and floor-truncated

    Raises:
        ParseError: If the sample is not a non-negative decimal integer
        CalculationError: If the sample yields a zero price or decimals are out of range
    """
    sqrt_price = parse_sqrt_price(sqrt_price_x96)
    _validate_decimals(decimals0, symbol0)
    _validate_decimals(decimals1, symbol1)

    ratio = Fraction(sqrt_price, Q96) ** 2
    decimal_factor = Fraction(10) ** (decimals1 - decimals0)

    price0_in_1 = ratio / decimal_factor
    if price0_in_1 == 0:
        raise CalculationError(
            f"Zero price from sqrt price sample {sqrt_price}",
            symbols=(symbol0, symbol1),
        )
    price1_in_0 = 1 / price0_in_1

    # Fraction floor division truncates toward negative infinity; both are positive
    quote = PriceQuote(
        price0_in_1=(price0_in_1 * PRICE_SCALE) // 1,
        price1_in_0=(price1_in_0 * PRICE_SCALE) // 1,
    )

    logger.debug(
        f"sqrtPriceX96={sqrt_price} {symbol0 or 'token0'}/{symbol1 or 'token1'} "
        f"-> {quote.price0_in_1}, {quote.price1_in_0}"
    )
    return quote
