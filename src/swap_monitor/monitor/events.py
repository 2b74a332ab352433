"""
Swap event decoding.

Swap(address indexed sender, address indexed recipient, int256 amount0,
     int256 amount1, uint160 sqrtPriceX96, uint128 liquidity, int24 tick)

topics = [Swap topic, sender, recipient]; the remaining fields are ABI-encoded
in the log data.
"""

from dataclasses import dataclass
from typing import Any, Optional

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from ..config.protocols import SWAP_DATA_TYPES, SWAP_EVENT_TOPIC
from ..errors import DecodeError
from ..transport.base import RawLog

_SWAP_TOPIC = HexBytes(SWAP_EVENT_TOPIC)


@dataclass(frozen=True)
class SwapEvent:
    """Decoded Uniswap V3 Swap log."""
    sender: str
    recipient: str
    amount0: int
    amount1: int
    sqrt_price_x96: int
    liquidity: int
    tick: int
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None
    log_index: Optional[int] = None


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    raise TypeError(f"Expected an int or numeric string, got {value!r}")


def _to_hex(value: Any) -> Optional[str]:
    if value is None:
        return None
    return HexBytes(value).to_0x_hex()


def decode_swap_log(log: RawLog, pool: Optional[str] = None) -> SwapEvent:
    """
    Decode a raw Swap log.

    Args:
        log: Raw log as delivered by a subscription
        pool: Pool address, for error context

    Returns:
        SwapEvent

    Raises:
        DecodeError: If the log is not a well-formed Swap event
    """
    try:
        topics = [HexBytes(topic) for topic in log["topics"]]
        data = HexBytes(log["data"])
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError("Malformed log entry", pool=pool, cause=e)

    if len(topics) != 3:
        raise DecodeError(f"Expected 3 topics for Swap, got {len(topics)}", pool=pool)
    if topics[0] != _SWAP_TOPIC:
        raise DecodeError(f"Not a Swap event: topic0={topics[0].to_0x_hex()}", pool=pool)

    try:
        (sender,) = decode(["address"], topics[1])
        (recipient,) = decode(["address"], topics[2])
        amount0, amount1, sqrt_price_x96, liquidity, tick = decode(SWAP_DATA_TYPES, data)
    except DecodingError as e:
        raise DecodeError("Failed to decode Swap log", pool=pool, cause=e)

    try:
        block_number = _to_int(log.get("blockNumber"))
        log_index = _to_int(log.get("logIndex"))
        transaction_hash = _to_hex(log.get("transactionHash"))
    except (TypeError, ValueError) as e:
        raise DecodeError("Malformed log position fields", pool=pool, cause=e)

    return SwapEvent(
        sender=to_checksum_address(sender),
        recipient=to_checksum_address(recipient),
        amount0=amount0,
        amount1=amount1,
        sqrt_price_x96=sqrt_price_x96,
        liquidity=liquidity,
        tick=tick,
        block_number=block_number,
        transaction_hash=transaction_hash,
        log_index=log_index,
    )
