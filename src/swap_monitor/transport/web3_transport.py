"""
Websocket transport built on web3's AsyncWeb3.

One websocket connection is shared by every pool monitor. Contract calls go
through it directly; log subscriptions are multiplexed by a single reader task
that routes each `eth_subscription` message to the LogSubscription it belongs
to, by subscription id.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set, Union

from eth_utils import to_checksum_address
from web3 import AsyncWeb3, WebSocketProvider

from ..config.protocols import ERC20_ABI, POOL_ABI
from ..errors import TransportError
from .base import BaseTransport, LogSubscription, RawLog

logger = logging.getLogger(__name__)


class Web3Transport(BaseTransport):
    """
    Shared websocket transport.

    Usage:
        async with await Web3Transport.connect("wss://...") as transport:
            sub = await transport.subscribe_logs(pool, [topic])
            async for log in sub:
                ...
    """

    def __init__(self, w3: AsyncWeb3):
        self.w3 = w3
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._subscriptions: Dict[str, LogSubscription] = {}
        # Messages that arrived before their subscription was registered
        self._pending: Dict[str, List[RawLog]] = {}
        # Ids released by close(); late messages for them are dropped
        self._closed_ids: Set[str] = set()
        self._reader: Optional[asyncio.Task] = None

    @classmethod
    async def connect(
        cls, rpc_url: str, websocket_kwargs: Optional[Dict[str, Any]] = None
    ) -> "Web3Transport":
        """
        Open the websocket connection.

        Raises:
            TransportError: If the connection cannot be established
        """
        try:
            w3 = await AsyncWeb3(WebSocketProvider(rpc_url, websocket_kwargs=websocket_kwargs or {}))
            connected = await w3.is_connected()
        except Exception as e:
            raise TransportError(f"Failed to connect websocket provider {rpc_url}: {e}") from e

        if not connected:
            raise TransportError(f"Websocket provider {rpc_url} is not connected")

        logger.info(f"Connected to {rpc_url}")
        return cls(w3)

    async def disconnect(self) -> None:
        """Stop routing subscriptions and close the websocket."""
        if self._reader is not None and not self._reader.done():
            self._reader.cancel()
            try:
                await self._reader
            except asyncio.CancelledError:
                pass
        self._end_all()
        await self.w3.provider.disconnect()
        self.logger.info("Websocket transport disconnected")

    async def __aenter__(self) -> "Web3Transport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    # Metadata queries

    def _contract(self, address: str, abi: List[Dict[str, Any]]):
        return self.w3.eth.contract(address=to_checksum_address(address), abi=abi)

    async def token0(self, pool: str) -> str:
        return await self._contract(pool, POOL_ABI).functions.token0().call()

    async def token1(self, pool: str) -> str:
        return await self._contract(pool, POOL_ABI).functions.token1().call()

    async def decimals(self, token: str) -> int:
        return await self._contract(token, ERC20_ABI).functions.decimals().call()

    async def symbol(self, token: str) -> str:
        return await self._contract(token, ERC20_ABI).functions.symbol().call()

    async def current_block(self) -> int:
        return await self.w3.eth.block_number

    # Subscriptions

    async def subscribe_logs(
        self, address: str, topics: List[str], from_block: Union[int, str] = "latest"
    ) -> LogSubscription:
        if from_block != "latest":
            raise ValueError(f"Websocket log subscriptions start at the chain head, got from_block={from_block}")

        start_block = await self.current_block()
        subscription_id = await self.w3.eth.subscribe(
            "logs", {"address": to_checksum_address(address), "topics": topics}
        )

        subscription = LogSubscription(
            subscription_id=subscription_id,
            address=address,
            topics=topics,
            from_block=start_block,
            on_close=self._unsubscribe,
        )
        self._subscriptions[subscription_id] = subscription
        for log in self._pending.pop(subscription_id, []):
            subscription.push(log)

        self._ensure_reader()
        self.logger.debug(f"Subscribed {subscription} from block {start_block}")
        return subscription

    async def _unsubscribe(self, subscription: LogSubscription) -> None:
        self._subscriptions.pop(subscription.subscription_id, None)
        self._closed_ids.add(subscription.subscription_id)
        self._pending.pop(subscription.subscription_id, None)
        try:
            await self.w3.eth.unsubscribe(subscription.subscription_id)
        except Exception as e:
            self.logger.warning(f"Failed to unsubscribe {subscription}: {e}")

    def _ensure_reader(self) -> None:
        if self._reader is None or self._reader.done():
            self._reader = asyncio.create_task(self._read_subscriptions())

    async def _read_subscriptions(self) -> None:
        """Route subscription messages until the connection ends."""
        error = None
        try:
            async for response in self.w3.socket.process_subscriptions():
                self._route(response)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Subscription stream failed: {e}")
            error = e
        finally:
            self._end_all(error)

    def _route(self, response: Dict[str, Any]) -> None:
        subscription_id = response.get("subscription")
        result = response.get("result")
        if subscription_id is None or result is None:
            return

        if subscription_id in self._closed_ids:
            return

        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            self._pending.setdefault(subscription_id, []).append(result)
            return
        subscription.push(result)

    def _end_all(self, error: Optional[BaseException] = None) -> None:
        for subscription in self._subscriptions.values():
            subscription.end(error)
        self._subscriptions.clear()
        self._pending.clear()
