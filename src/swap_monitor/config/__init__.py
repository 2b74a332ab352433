"""
Configuration management for the swap price monitor.

Use get_config() to access all configuration settings.

Example:
    from swap_monitor.config import get_config

    config = get_config()

    # Websocket endpoint
    rpc_url = config.chains.RPC_URL

    # Validated pool addresses
    pools = config.monitor.pool_addresses
"""

from .base import BaseConfig, ConfigError, JsonLogFormatter
from .chains import ChainConfig
from .manager import ConfigManager, get_config
from .monitor import MonitorConfig, normalize_pool_addresses
from .protocols import (
    ERC20_ABI,
    POOL_ABI,
    SWAP_DATA_TYPES,
    SWAP_EVENT_SIGNATURE,
    SWAP_EVENT_TOPIC,
)

__all__ = [
    "BaseConfig",
    "ConfigError",
    "JsonLogFormatter",
    "ChainConfig",
    "MonitorConfig",
    "ConfigManager",
    "get_config",
    "normalize_pool_addresses",
    "ERC20_ABI",
    "POOL_ABI",
    "SWAP_DATA_TYPES",
    "SWAP_EVENT_SIGNATURE",
    "SWAP_EVENT_TOPIC",
]
