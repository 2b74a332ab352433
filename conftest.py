"""
Shared pytest fixtures for swap monitor tests.
"""

import pytest

from swap_monitor.tests.fakes import (
    DAI,
    DAI_USDC_POOL,
    USDC,
    USDC_WETH_POOL,
    WBTC,
    WBTC_WETH_POOL,
    WETH,
    FakeTransport,
    build_swap_log,
)


@pytest.fixture
def swap_log():
    """Factory for raw Swap logs."""
    return build_swap_log


@pytest.fixture
def fake_transport():
    """FakeTransport with the USDC/WETH, WBTC/WETH and DAI/USDC pools registered."""
    transport = FakeTransport()
    transport.add_token(USDC, 6, "USDC")
    transport.add_token(WETH, 18, "WETH")
    transport.add_token(WBTC, 8, "WBTC")
    transport.add_token(DAI, 18, "DAI")
    transport.add_pool(USDC_WETH_POOL, USDC, WETH)
    transport.add_pool(WBTC_WETH_POOL, WBTC, WETH)
    transport.add_pool(DAI_USDC_POOL, DAI, USDC)
    return transport
