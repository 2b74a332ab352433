"""
Pool and token metadata resolution.
"""

import logging
from dataclasses import dataclass

from eth_utils import to_checksum_address

from ..errors import FetchError
from ..pricing.calculator import MAX_TOKEN_DECIMALS
from ..transport.base import BaseTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenInfo:
    """ERC20 metadata needed to price a pool."""
    address: str
    decimals: int
    symbol: str


@dataclass(frozen=True)
class PoolConfig:
    """A pool and its two tokens, resolved once per monitor."""
    address: str
    token0: TokenInfo
    token1: TokenInfo

    @property
    def pair(self) -> str:
        return f"{self.token0.symbol}/{self.token1.symbol}"


async def load_token_info(transport: BaseTransport, token: str, pool: str) -> TokenInfo:
    """
    Fetch decimals and symbol for one token.

    Raises:
        FetchError: If either call fails or decimals are out of range
    """
    try:
        decimals = await transport.decimals(token)
    except Exception as e:
        raise FetchError("Failed to fetch token decimals", pool=pool, token=token, field="decimals", cause=e)

    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= MAX_TOKEN_DECIMALS:
        raise FetchError(
            f"Token decimals out of range: {decimals!r}", pool=pool, token=token, field="decimals"
        )

    try:
        symbol = await transport.symbol(token)
    except Exception as e:
        raise FetchError("Failed to fetch token symbol", pool=pool, token=token, field="symbol", cause=e)

    return TokenInfo(address=token, decimals=decimals, symbol=str(symbol))


async def resolve_pool_config(transport: BaseTransport, pool: str) -> PoolConfig:
    """
    Resolve a pool's token addresses and their metadata.

    Args:
        transport: Shared chain transport
        pool: Pool address

    Returns:
        PoolConfig

    Raises:
        FetchError: On the first failed lookup, naming the field that failed
    """
    try:
        token0 = to_checksum_address(await transport.token0(pool))
    except Exception as e:
        raise FetchError("Failed to fetch token0 address", pool=pool, field="token0", cause=e)

    try:
        token1 = to_checksum_address(await transport.token1(pool))
    except Exception as e:
        raise FetchError("Failed to fetch token1 address", pool=pool, field="token1", cause=e)

    info0 = await load_token_info(transport, token0, pool)
    info1 = await load_token_info(transport, token1, pool)

    logger.debug(f"Resolved pool {pool}: {info0.symbol}({info0.decimals})/{info1.symbol}({info1.decimals})")
    return PoolConfig(address=pool, token0=info0, token1=info1)
