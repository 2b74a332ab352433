"""
Error taxonomy for the swap price monitor.

Every failure a pool monitor can hit is one of the MonitorError subclasses
below. Each carries the pool (and token, where known) it happened on, so the
supervisor can log it with full context without knowing where it came from.
"""

from typing import Optional, Tuple


class MonitorError(Exception):
    """Base exception for all per-pool monitor errors."""

    def __init__(
        self,
        message: str,
        pool: Optional[str] = None,
        token: Optional[str] = None,
        field: Optional[str] = None,
        symbols: Optional[Tuple[str, str]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.pool = pool
        self.token = token
        self.field = field
        self.symbols = symbols
        self.cause = cause

    @property
    def kind(self) -> str:
        """Short name of the error class, e.g. 'FetchError'."""
        return type(self).__name__

    def context(self) -> dict:
        """Identifying context for structured log records."""
        ctx = {"error_type": self.kind, "pool": self.pool}
        if self.token:
            ctx["token"] = self.token
        if self.field:
            ctx["field"] = self.field
        if self.symbols:
            ctx["pair"] = "/".join(self.symbols)
        if self.cause is not None:
            ctx["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return ctx

    def __str__(self) -> str:
        parts = [self.message]
        if self.pool:
            parts.append(f"pool={self.pool}")
        if self.token:
            parts.append(f"token={self.token}")
        if self.field:
            parts.append(f"field={self.field}")
        if self.symbols:
            parts.append(f"pair={'/'.join(self.symbols)}")
        if self.cause is not None:
            parts.append(f"cause={self.cause}")
        return " ".join(parts)


class ParseError(MonitorError):
    """Raised when a sqrt price numeral is not a non-negative decimal integer."""
    pass


class FetchError(MonitorError):
    """Raised when a pool or token metadata query fails."""
    pass


class SubscriptionError(MonitorError):
    """Raised when a log subscription cannot be opened or breaks mid-stream."""
    pass


class DecodeError(MonitorError):
    """Raised when a raw log cannot be decoded into a Swap event."""
    pass


class FormatError(MonitorError):
    """Raised when a scaled integer cannot be rendered as a decimal string."""
    pass


class CalculationError(MonitorError):
    """Raised when a price cannot be derived from a sqrt price sample."""
    pass


class TransportError(Exception):
    """Raised when the shared chain connection cannot be established."""
    pass
