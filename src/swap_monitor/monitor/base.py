"""
Base types for pool monitors.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..errors import MonitorError
from ..pricing import PriceQuote


class MonitorState(Enum):
    """Pool monitor lifecycle state."""
    INITIALIZING = "initializing"
    SUBSCRIBING = "subscribing"
    STREAMING = "streaming"
    TERMINATED = "terminated"


class DecodeFailurePolicy(Enum):
    """What a monitor does with a log it cannot decode."""
    TERMINATE = "terminate"  # end this pool's monitor with a DecodeError
    SKIP = "skip"  # log a warning and keep streaming


@dataclass(frozen=True)
class PriceObservation:
    """One price derived from one Swap event."""
    pool: str
    symbol0: str
    symbol1: str
    quote: PriceQuote
    price0_in_1: str
    price1_in_0: str
    sqrt_price_x96: int
    block_number: Optional[int] = None
    transaction_hash: Optional[str] = None

    @property
    def summary(self) -> str:
        """e.g. '1 WETH = 3,012.5 USDC, 1 USDC = 0.000331 WETH'."""
        return (
            f"1 {self.symbol0} = {self.price0_in_1}, "
            f"1 {self.symbol1} = {self.price1_in_0}"
        )

    def to_log_extra(self) -> Dict[str, Any]:
        """Structured fields for the observation log record."""
        return {
            "pool": self.pool,
            "pair": f"{self.symbol0}/{self.symbol1}",
            "price0_in_1": self.price0_in_1,
            "price1_in_0": self.price1_in_0,
            "sqrt_price_x96": str(self.sqrt_price_x96),
            "block_number": self.block_number,
            "transaction_hash": self.transaction_hash,
        }


ObservationCallback = Callable[[PriceObservation], None]


@dataclass
class MonitorResult:
    """Terminal outcome of one pool monitor."""
    pool: str
    state: MonitorState = MonitorState.TERMINATED
    error: Optional[MonitorError] = None
    observations: int = 0
    skipped: int = 0
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None

    @property
    def success(self) -> bool:
        """True when the stream ended cleanly."""
        return self.error is None

    @property
    def failed(self) -> bool:
        return not self.success

    @property
    def duration(self) -> Optional[timedelta]:
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return None
