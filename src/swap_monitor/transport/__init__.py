"""
Chain transports shared by pool monitors.
"""

from .base import BaseTransport, LogSubscription, RawLog
from .web3_transport import Web3Transport

__all__ = [
    "BaseTransport",
    "LogSubscription",
    "RawLog",
    "Web3Transport",
]
