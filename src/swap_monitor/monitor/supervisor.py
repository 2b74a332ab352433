"""
Supervisor that runs one PoolMonitor per pool over a shared transport.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..errors import MonitorError
from ..transport.base import BaseTransport
from .base import DecodeFailurePolicy, MonitorResult, MonitorState, ObservationCallback
from .pool_monitor import PoolMonitor

logger = logging.getLogger(__name__)


class Supervisor:
    """
    Fan out pool monitors and wait for all of them.

    A failed monitor is logged and left terminated; its siblings keep
    running. Nothing is restarted.

    Usage:
        supervisor = Supervisor(transport)
        results = await supervisor.run(["0x88e6...", "0x8ad5..."])
    """

    def __init__(
        self,
        transport: BaseTransport,
        on_observation: Optional[ObservationCallback] = None,
        decode_policy: DecodeFailurePolicy = DecodeFailurePolicy.TERMINATE,
    ):
        self.transport = transport
        self.on_observation = on_observation
        self.decode_policy = decode_policy
        self.tasks: Dict[str, asyncio.Task] = {}
        self.monitors: Dict[str, PoolMonitor] = {}
        self.results: Dict[str, MonitorResult] = {}

    def spawn(self, pool: str) -> asyncio.Task:
        """Start a monitor for one pool and return its task handle."""
        if pool in self.tasks:
            return self.tasks[pool]

        monitor = PoolMonitor(
            pool,
            self.transport,
            on_observation=self.on_observation,
            decode_policy=self.decode_policy,
        )
        task = asyncio.create_task(monitor.run(), name=f"pool-monitor-{pool}")
        self.monitors[pool] = monitor
        self.tasks[pool] = task
        logger.debug(f"Spawned monitor for pool {pool}")
        return task

    async def run(self, pools: List[str]) -> Dict[str, MonitorResult]:
        """
        Monitor every pool until all monitors have terminated.

        Args:
            pools: Validated pool addresses; duplicates are collapsed

        Returns:
            Dict mapping pool address to its MonitorResult
        """
        for pool in pools:
            self.spawn(pool)

        logger.info(f"Monitoring {len(self.tasks)} pools")

        pool_order = list(self.tasks)
        outcomes = await asyncio.gather(*self.tasks.values(), return_exceptions=True)

        for pool, outcome in zip(pool_order, outcomes):
            result = self._to_result(pool, outcome)
            self.results[pool] = result
            self._log_result(result)

        failed = sum(1 for result in self.results.values() if result.failed)
        logger.info(
            f"All monitors terminated: {len(self.results) - failed} closed cleanly, {failed} failed"
        )
        return self.results

    def _to_result(self, pool: str, outcome) -> MonitorResult:
        """Turn whatever a monitor task produced into a MonitorResult."""
        if isinstance(outcome, MonitorResult):
            return outcome

        if isinstance(outcome, MonitorError):
            error = outcome
        else:
            error = MonitorError("Monitor task crashed", pool=pool, cause=outcome)

        monitor = self.monitors.get(pool)
        return MonitorResult(
            pool=pool,
            state=monitor.state if monitor else MonitorState.TERMINATED,
            error=error,
            end_time=datetime.now(timezone.utc),
        )

    def _log_result(self, result: MonitorResult) -> None:
        if result.success:
            logger.info(
                f"Monitor for pool {result.pool} finished: {result.observations} observations"
            )
        else:
            logger.error(
                f"Monitor for pool {result.pool} failed: {result.error}",
                extra=result.error.context(),
            )
