"""
Pool monitoring configuration for the swap price monitor.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from eth_utils import is_address, to_checksum_address

from .base import BaseConfig, ConfigError

logger = logging.getLogger(__name__)

DECODE_FAILURE_POLICIES = ["terminate", "skip"]


def normalize_pool_addresses(raw_addresses: List[str]) -> List[str]:
    """
    Checksum and deduplicate pool addresses, dropping malformed entries.

    Order of first occurrence is preserved.
    """
    pools = []
    seen = set()
    for raw in raw_addresses:
        candidate = raw.strip()
        if not is_address(candidate):
            logger.debug(f"Dropping malformed pool address: {raw!r}")
            continue
        address = to_checksum_address(candidate)
        if address in seen:
            continue
        seen.add(address)
        pools.append(address)
    return pools


@dataclass
class MonitorConfig(BaseConfig):
    """Which pools to watch and how to treat undecodable logs."""

    POOLS: List[str] = field(default_factory=lambda: BaseConfig.get_env_list("POOLS"))
    DECODE_FAILURE_POLICY: str = field(
        default_factory=lambda: BaseConfig.get_env("DECODE_FAILURE_POLICY", "terminate")
    )

    def _validate_config(self):
        super()._validate_config()
        if self.DECODE_FAILURE_POLICY.lower() not in DECODE_FAILURE_POLICIES:
            raise ConfigError(
                f"Invalid DECODE_FAILURE_POLICY: {self.DECODE_FAILURE_POLICY} "
                f"(expected one of {DECODE_FAILURE_POLICIES})"
            )

    @property
    def pool_addresses(self) -> List[str]:
        """Validated, checksummed, deduplicated pool addresses."""
        return normalize_pool_addresses(self.POOLS)

    @property
    def skip_undecodable(self) -> bool:
        """Whether undecodable logs are skipped instead of ending the monitor."""
        return self.DECODE_FAILURE_POLICY.lower() == "skip"
