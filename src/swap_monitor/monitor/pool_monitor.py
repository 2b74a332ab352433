"""
Per-pool Swap event monitor.

Lifecycle: INITIALIZING -> SUBSCRIBING -> STREAMING -> TERMINATED

- INITIALIZING: resolve token0/token1 and their decimals/symbols once
- SUBSCRIBING: open a Swap log subscription for this pool at the chain head
- STREAMING: decode each log in delivery order, price it, emit an observation
- TERMINATED: stream ended cleanly (success) or a MonitorError ended it

Every error is scoped to this pool; nothing here is retried.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..config.protocols import SWAP_EVENT_TOPIC
from ..errors import (
    CalculationError,
    DecodeError,
    FormatError,
    MonitorError,
    ParseError,
    SubscriptionError,
)
from ..pricing import calculate_prices, format_price
from ..transport.base import BaseTransport, LogSubscription, RawLog
from .base import (
    DecodeFailurePolicy,
    MonitorResult,
    MonitorState,
    ObservationCallback,
    PriceObservation,
)
from .events import SwapEvent, decode_swap_log
from .tokens import PoolConfig, resolve_pool_config


class PoolMonitor:
    """
    Watch one pool's Swap events and derive a price from each.

    Usage:
        monitor = PoolMonitor(pool_address, transport)
        result = await monitor.run()
    """

    def __init__(
        self,
        pool: str,
        transport: BaseTransport,
        on_observation: Optional[ObservationCallback] = None,
        decode_policy: DecodeFailurePolicy = DecodeFailurePolicy.TERMINATE,
    ):
        self.pool = pool
        self.transport = transport
        self.on_observation = on_observation
        self.decode_policy = decode_policy
        self.state = MonitorState.INITIALIZING
        self.config: Optional[PoolConfig] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _transition(self, state: MonitorState) -> None:
        self.logger.debug(f"Pool {self.pool}: {self.state.value} -> {state.value}")
        self.state = state

    async def run(self) -> MonitorResult:
        """
        Run the monitor until its stream ends or an error stops it.

        Returns:
            MonitorResult; `error` is set when the monitor terminated with a MonitorError
        """
        result = MonitorResult(pool=self.pool)
        subscription: Optional[LogSubscription] = None

        try:
            self.config = await resolve_pool_config(self.transport, self.pool)

            self._transition(MonitorState.SUBSCRIBING)
            subscription = await self._subscribe()

            self._transition(MonitorState.STREAMING)
            self.logger.info(
                f"Listening pool: {self.pool} ({self.config.pair}) from block {subscription.from_block}"
            )

            while True:
                log = await self._next_log(subscription)
                if log is None:
                    break
                self._handle_log(log, result)

            self.logger.info(f"Stream for pool {self.pool} closed after {result.observations} observations")

        except MonitorError as e:
            result.error = e

        finally:
            self._transition(MonitorState.TERMINATED)
            result.state = self.state
            result.end_time = datetime.now(timezone.utc)
            if subscription is not None:
                await subscription.close()

        return result

    async def _subscribe(self) -> LogSubscription:
        try:
            return await self.transport.subscribe_logs(self.pool, [SWAP_EVENT_TOPIC])
        except Exception as e:
            raise SubscriptionError("Failed to subscribe to Swap logs", pool=self.pool, cause=e)

    async def _next_log(self, subscription: LogSubscription) -> Optional[RawLog]:
        """Next raw log, or None once the stream has ended cleanly."""
        try:
            return await subscription.__anext__()
        except StopAsyncIteration:
            return None
        except Exception as e:
            raise SubscriptionError("Log stream failed", pool=self.pool, cause=e)

    def _handle_log(self, log: RawLog, result: MonitorResult) -> None:
        try:
            event = decode_swap_log(log, pool=self.pool)
        except DecodeError as e:
            if self.decode_policy is DecodeFailurePolicy.SKIP:
                result.skipped += 1
                self.logger.warning(f"Skipping undecodable log: {e}", extra=e.context())
                return
            raise

        observation = self.observe(event)
        result.observations += 1

        self.logger.info(observation.summary, extra=observation.to_log_extra())
        if self.on_observation is not None:
            self.on_observation(observation)

    def observe(self, event: SwapEvent) -> PriceObservation:
        """
        Price one decoded Swap event with this pool's token metadata.

        Raises:
            CalculationError: Wrapping any parse, calculation or format failure
        """
        token0, token1 = self.config.token0, self.config.token1

        try:
            quote = calculate_prices(
                str(event.sqrt_price_x96),
                token0.decimals,
                token1.decimals,
                token0.symbol,
                token1.symbol,
            )
            price0_in_1 = format_price(quote.price0_in_1, token1.symbol)
            price1_in_0 = format_price(quote.price1_in_0, token0.symbol)
        except (ParseError, CalculationError, FormatError) as e:
            raise CalculationError(
                f"Failed to calculate price for {token0.symbol}/{token1.symbol}",
                pool=self.pool,
                symbols=(token0.symbol, token1.symbol),
                cause=e,
            )

        return PriceObservation(
            pool=self.pool,
            symbol0=token0.symbol,
            symbol1=token1.symbol,
            quote=quote,
            price0_in_1=price0_in_1,
            price1_in_0=price1_in_0,
            sqrt_price_x96=event.sqrt_price_x96,
            block_number=event.block_number,
            transaction_hash=event.transaction_hash,
        )
