"""
Tests for the pool monitor supervisor.
"""

import asyncio
import logging
from unittest.mock import patch

import pytest

from swap_monitor.errors import MonitorError, SubscriptionError
from swap_monitor.monitor import MonitorResult, PoolMonitor, Supervisor
from swap_monitor.pricing import Q96
from swap_monitor.tests.fakes import (
    DAI_USDC_POOL,
    USDC_WETH_POOL,
    USDC_WETH_SQRT_PRICE,
    WBTC_WETH_POOL,
)

POOLS = [USDC_WETH_POOL, WBTC_WETH_POOL, DAI_USDC_POOL]


class TestSupervisor:
    """Test fan-out and fault isolation."""

    @pytest.mark.asyncio
    async def test_all_pools_succeed(self, fake_transport, swap_log):
        for pool in POOLS:
            fake_transport.add_logs(pool, [swap_log(Q96, pool=pool), swap_log(Q96, pool=pool)])
        observations = []

        results = await Supervisor(fake_transport, on_observation=observations.append).run(POOLS)

        assert list(results) == POOLS
        assert all(result.success for result in results.values())
        assert all(result.observations == 2 for result in results.values())
        assert len(observations) == 6

    @pytest.mark.asyncio
    async def test_one_failed_subscription_is_isolated(self, fake_transport, swap_log, caplog):
        for pool in POOLS:
            fake_transport.add_logs(pool, [swap_log(USDC_WETH_SQRT_PRICE, pool=pool)])
        fake_transport.fail("subscribe_logs", WBTC_WETH_POOL)
        caplog.set_level(logging.INFO)

        results = await Supervisor(fake_transport).run(POOLS)

        assert isinstance(results[WBTC_WETH_POOL].error, SubscriptionError)
        assert results[WBTC_WETH_POOL].observations == 0
        assert results[USDC_WETH_POOL].success
        assert results[USDC_WETH_POOL].observations == 1
        assert results[DAI_USDC_POOL].success
        assert results[DAI_USDC_POOL].observations == 1
        assert f"Monitor for pool {WBTC_WETH_POOL} failed" in caplog.text
        assert "1 failed" in caplog.text

    @pytest.mark.asyncio
    async def test_duplicate_pools_spawn_once(self, fake_transport):
        supervisor = Supervisor(fake_transport)

        results = await supervisor.run([USDC_WETH_POOL, USDC_WETH_POOL])

        assert list(results) == [USDC_WETH_POOL]
        assert len(fake_transport.subscriptions) == 1

    @pytest.mark.asyncio
    async def test_spawn_returns_task(self, fake_transport):
        supervisor = Supervisor(fake_transport)

        task = supervisor.spawn(USDC_WETH_POOL)

        assert isinstance(task, asyncio.Task)
        assert supervisor.spawn(USDC_WETH_POOL) is task
        result = await task
        assert isinstance(result, MonitorResult)

    @pytest.mark.asyncio
    async def test_crashed_monitor_becomes_failed_result(self, fake_transport):
        async def crash(self):
            raise RuntimeError("unexpected")

        with patch.object(PoolMonitor, "run", crash):
            results = await Supervisor(fake_transport).run([USDC_WETH_POOL])

        result = results[USDC_WETH_POOL]
        assert result.failed
        assert type(result.error) is MonitorError
        assert isinstance(result.error.cause, RuntimeError)
        assert result.error.pool == USDC_WETH_POOL

    @pytest.mark.asyncio
    async def test_empty_pool_list(self, fake_transport):
        results = await Supervisor(fake_transport).run([])

        assert results == {}
