"""
Pool monitoring: per-pool state machines and the supervisor that runs them.

Usage:
    from swap_monitor.monitor import Supervisor

    supervisor = Supervisor(transport)
    results = await supervisor.run(pool_addresses)
"""

from .base import (
    DecodeFailurePolicy,
    MonitorResult,
    MonitorState,
    ObservationCallback,
    PriceObservation,
)
from .events import SwapEvent, decode_swap_log
from .pool_monitor import PoolMonitor
from .supervisor import Supervisor
from .tokens import PoolConfig, TokenInfo, load_token_info, resolve_pool_config

__all__ = [
    "DecodeFailurePolicy",
    "MonitorResult",
    "MonitorState",
    "ObservationCallback",
    "PriceObservation",
    "SwapEvent",
    "decode_swap_log",
    "PoolMonitor",
    "Supervisor",
    "PoolConfig",
    "TokenInfo",
    "load_token_info",
    "resolve_pool_config",
]
