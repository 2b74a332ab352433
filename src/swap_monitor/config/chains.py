"""
Chain connection configuration for the swap price monitor.
"""

from dataclasses import dataclass, field
from typing import Dict

from .base import BaseConfig, ConfigError

DEFAULT_RPC_URL = "wss://ethereum-rpc.publicnode.com"


@dataclass
class ChainConfig(BaseConfig):
    """Websocket endpoint and chain identity."""

    CHAIN_NAME: str = field(default_factory=lambda: BaseConfig.get_env("CHAIN_NAME", "ethereum"))
    RPC_URL: str = field(default_factory=lambda: BaseConfig.get_env("RPC_URL", DEFAULT_RPC_URL))

    # Websocket frames can be large for busy pools
    MAX_MESSAGE_SIZE: int = field(
        default_factory=lambda: BaseConfig.get_env_int("WS_MAX_MESSAGE_SIZE", 2**20)
    )

    def _validate_config(self):
        super()._validate_config()
        if not self.RPC_URL.startswith(("ws://", "wss://")):
            raise ConfigError(
                f"RPC_URL must be a websocket endpoint (ws:// or wss://), got: {self.RPC_URL}"
            )
        if self.MAX_MESSAGE_SIZE <= 0:
            raise ConfigError(f"WS_MAX_MESSAGE_SIZE must be positive, got: {self.MAX_MESSAGE_SIZE}")

    @property
    def websocket_kwargs(self) -> Dict[str, int]:
        """Keyword arguments for the websocket connection."""
        return {"max_size": self.MAX_MESSAGE_SIZE}
