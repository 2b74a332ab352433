"""
Uniswap V3 swap price monitor.

Streams Swap events from a set of pools over one websocket connection and
logs, for every swap, the price of each pool token in terms of the other.

Package Structure:
├── config/      # Environment-driven configuration and logging setup
├── pricing/     # sqrtPriceX96 -> scaled quotes -> display strings
├── transport/   # Shared chain access (web3 websocket)
├── monitor/     # Per-pool state machines and the supervisor
├── errors.py    # Error taxonomy
└── cli.py       # Entry point
"""

__version__ = "0.1.0"

from .errors import (
    CalculationError,
    DecodeError,
    FetchError,
    FormatError,
    MonitorError,
    ParseError,
    SubscriptionError,
    TransportError,
)
from .pricing import PriceQuote, calculate_prices, format_price, format_units

__all__ = [
    "__version__",
    "CalculationError",
    "DecodeError",
    "FetchError",
    "FormatError",
    "MonitorError",
    "ParseError",
    "SubscriptionError",
    "TransportError",
    "PriceQuote",
    "calculate_prices",
    "format_price",
    "format_units",
]
