"""
In-memory fakes and Swap log builders for tests.
"""

from typing import Dict, List, Optional, Tuple

from eth_abi import encode
from hexbytes import HexBytes

from swap_monitor.config.protocols import SWAP_DATA_TYPES, SWAP_EVENT_TOPIC
from swap_monitor.pricing import Q96
from swap_monitor.transport.base import BaseTransport, LogSubscription, RawLog

# Mainnet addresses, lowercase so they never depend on checksum casing
USDC_WETH_POOL = "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"
WBTC_WETH_POOL = "0xcbcdf9626bc03e24f779434178a73a0b4bad62ed"
DAI_USDC_POOL = "0x5777d92f208679db4b9778590fa3cab3ac9e2168"

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"

SENDER = "0xe592427a0aece92de3edee1f18e0157c05861564"
RECIPIENT = "0x3fc91a3afd70395cd496c647d5a6cc9d4b2b7fad"

# 1 USDC = 0.0004 WETH, 1 WETH = 2,500 USDC
USDC_WETH_SQRT_PRICE = 20_000 * Q96


class FakeTransport(BaseTransport):
    """In-memory transport with scripted metadata and log streams."""

    def __init__(self):
        self.pools: Dict[str, Tuple[str, str]] = {}
        self.tokens: Dict[str, Tuple[int, str]] = {}
        self.logs: Dict[str, List[RawLog]] = {}
        self.stream_errors: Dict[str, BaseException] = {}
        self.failures: Dict[Tuple[str, str], BaseException] = {}
        self.block = 19_000_000
        self.subscriptions: List[LogSubscription] = []
        self.closed: List[LogSubscription] = []
        self.disconnected = False

    def add_pool(self, pool: str, token0: str, token1: str) -> None:
        self.pools[pool.lower()] = (token0, token1)

    def add_token(self, token: str, decimals: int, symbol: str) -> None:
        self.tokens[token.lower()] = (decimals, symbol)

    def add_logs(self, pool: str, logs: List[RawLog], error: Optional[BaseException] = None) -> None:
        self.logs[pool.lower()] = list(logs)
        if error is not None:
            self.stream_errors[pool.lower()] = error

    def fail(self, method: str, key: str, error: Optional[BaseException] = None) -> None:
        """Make `method` raise for the given pool or token."""
        self.failures[(method, key.lower())] = error or RuntimeError(f"{method} call reverted")

    def _check(self, method: str, key: str) -> None:
        error = self.failures.get((method, key.lower()))
        if error is not None:
            raise error

    async def token0(self, pool: str) -> str:
        self._check("token0", pool)
        return self.pools[pool.lower()][0]

    async def token1(self, pool: str) -> str:
        self._check("token1", pool)
        return self.pools[pool.lower()][1]

    async def decimals(self, token: str) -> int:
        self._check("decimals", token)
        return self.tokens[token.lower()][0]

    async def symbol(self, token: str) -> str:
        self._check("symbol", token)
        return self.tokens[token.lower()][1]

    async def current_block(self) -> int:
        return self.block

    async def subscribe_logs(self, address, topics, from_block="latest") -> LogSubscription:
        self._check("subscribe_logs", address)
        subscription = LogSubscription(
            subscription_id=f"0x{len(self.subscriptions) + 1:x}",
            address=address,
            topics=topics,
            from_block=self.block,
            on_close=self._on_close,
        )
        for log in self.logs.get(address.lower(), []):
            subscription.push(log)
        subscription.end(self.stream_errors.get(address.lower()))
        self.subscriptions.append(subscription)
        return subscription

    async def _on_close(self, subscription: LogSubscription) -> None:
        self.closed.append(subscription)

    async def __aenter__(self) -> "FakeTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnected = True


def build_swap_log(
    sqrt_price_x96: int,
    pool: str = USDC_WETH_POOL,
    amount0: int = -1_000_000,
    amount1: int = 400_000_000_000_000,
    liquidity: int = 10**18,
    tick: int = -198_080,
    block_number: int = 19_000_001,
    log_index: int = 0,
) -> RawLog:
    """Raw Swap log shaped like an eth_subscription 'logs' payload."""
    return {
        "address": pool,
        "topics": [
            HexBytes(SWAP_EVENT_TOPIC),
            HexBytes(encode(["address"], [SENDER])),
            HexBytes(encode(["address"], [RECIPIENT])),
        ],
        "data": HexBytes(encode(SWAP_DATA_TYPES, [amount0, amount1, sqrt_price_x96, liquidity, tick])),
        "blockNumber": block_number,
        "transactionHash": HexBytes(block_number.to_bytes(16, "big") + log_index.to_bytes(16, "big")),
        "logIndex": log_index,
    }
