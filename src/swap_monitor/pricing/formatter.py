"""
Human-readable rendering of fixed-point token amounts.
"""

from ..errors import FormatError
from .calculator import PRICE_DECIMALS

# On-chain amounts are uint256
MAX_UINT256 = 2**256 - 1


def format_units(value: int, decimals: int, symbol: str) -> str:
    """
    Render a scaled integer as a decimal string with a unit symbol.

    The integer part gets a ',' every three digits; trailing zeros of the
    fraction are dropped, and so is the '.' when nothing is left of it.

    Examples:
        format_units(1_500_000_000_000_000_000, 18, "USDC") -> "1.5 USDC"
        format_units(1_234_567_000_000_000_000_000, 18, "USDC") -> "1,234.567 USDC"

    Raises:
        FormatError: If value or decimals are not valid non-negative integers,
            or value does not fit in a uint256
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"Cannot format non-integer amount: {value!r}")
    if value < 0 or value > MAX_UINT256:
        raise FormatError(f"Amount does not fit in uint256: {value}")
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise FormatError(f"Invalid decimals: {decimals!r}")

    int_part, frac_part = divmod(value, 10**decimals)
    fraction = str(frac_part).zfill(decimals).rstrip("0") if decimals else ""

    if not fraction:
        return f"{int_part:,} {symbol}"
    return f"{int_part:,}.{fraction} {symbol}"


def format_price(value: int, symbol: str) -> str:
    """Render a 10^18-scaled price quote."""
    return format_units(value, PRICE_DECIMALS, symbol)
