"""
Base classes for chain transports.

A transport is the only resource the pool monitors share. It answers the
read-only metadata queries a monitor needs while initializing and hands out
independent, ordered log subscriptions.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

RawLog = Dict[str, Any]

_STREAM_END = object()


class LogSubscription:
    """
    Live, ordered, non-restartable stream of raw logs.

    The transport pushes logs in delivery order; consumers iterate with
    `async for`. Iteration stops when the transport ends the stream, or
    raises the error the transport ended it with.
    """

    def __init__(
        self,
        subscription_id: str,
        address: str,
        topics: List[str],
        from_block: Optional[int] = None,
        on_close: Optional[Callable[["LogSubscription"], Awaitable[None]]] = None,
    ):
        self.subscription_id = subscription_id
        self.address = address
        self.topics = topics
        self.from_block = from_block
        self._queue: asyncio.Queue = asyncio.Queue()
        self._on_close = on_close
        self._finished = False
        self._closed = False

    @property
    def finished(self) -> bool:
        """True once the stream has been fully consumed."""
        return self._finished

    def push(self, log: RawLog) -> None:
        """Deliver one raw log to the consumer."""
        self._queue.put_nowait(log)

    def end(self, error: Optional[BaseException] = None) -> None:
        """Terminate the stream, cleanly or with an error."""
        self._queue.put_nowait(error if error is not None else _STREAM_END)

    def __aiter__(self) -> "LogSubscription":
        return self

    async def __anext__(self) -> RawLog:
        if self._finished:
            raise StopAsyncIteration

        item = await self._queue.get()
        if item is _STREAM_END:
            self._finished = True
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            self._finished = True
            raise item
        return item

    async def close(self) -> None:
        """Release the subscription on the transport side."""
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            await self._on_close(self)

    def __repr__(self) -> str:
        return f"LogSubscription(id={self.subscription_id}, address={self.address})"


class BaseTransport(ABC):
    """
    Abstract base class for chain access used by pool monitors.

    Implementations must be safe to share between concurrently running
    monitors: every method is a read-only query or an independently
    addressed subscription.
    """

    @abstractmethod
    async def token0(self, pool: str) -> str:
        """Address of the pool's token0."""
        pass

    @abstractmethod
    async def token1(self, pool: str) -> str:
        """Address of the pool's token1."""
        pass

    @abstractmethod
    async def decimals(self, token: str) -> int:
        """ERC20 decimals of a token."""
        pass

    @abstractmethod
    async def symbol(self, token: str) -> str:
        """ERC20 symbol of a token."""
        pass

    @abstractmethod
    async def current_block(self) -> int:
        """Latest block number."""
        pass

    @abstractmethod
    async def subscribe_logs(
        self, address: str, topics: List[str], from_block: Union[int, str] = "latest"
    ) -> LogSubscription:
        """
        Open a live log subscription.

        Args:
            address: Contract address to filter on
            topics: Topic filter, topic0 first
            from_block: Starting chain position; live subscriptions start at the head

        Returns:
            LogSubscription delivering raw logs in order
        """
        pass
