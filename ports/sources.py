"""
Candle source port and error types.

The broker layer is an external collaborator: anything that can hand back
a time-ordered list of candles for a symbol and interval satisfies
CandleSource. Failures at that boundary are reported with the structured
errors below.
"""

from abc import abstractmethod
from datetime import date, datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from domain import Candle


# ============================================================================
# Error Codes
# ============================================================================

class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # Network errors (1xx)
    NETWORK_CONNECTION = "E102"

    # Data errors (4xx)
    DATA_MISSING = "E401"
    DATA_INVALID = "E402"
    DATA_EMPTY = "E404"

    # Validation errors (5xx)
    VALIDATION_SYMBOL = "E501"
    VALIDATION_PARAM = "E502"

    # Internal errors (9xx)
    UNKNOWN = "E999"


# ============================================================================
# Error Classes
# ============================================================================

class SourceError(Exception):
    """
    Base exception for candle source failures.

    Provides structured error information for debugging and monitoring.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        source: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.source = source
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()

        parts = [f"[{code.value}]"]
        if source:
            parts.append(f"[{source}]")
        parts.append(message)

        self.message = message
        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "source": self.source,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }


class FetchError(SourceError):
    """Raised when candles cannot be fetched."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.NETWORK_CONNECTION,
        cause: Exception | None = None,
    ):
        self.reason = reason
        super().__init__(
            message=reason,
            code=code,
            source=source,
            context={"reason": reason},
            cause=cause,
        )


class DataError(SourceError):
    """Raised when fetched candle data is missing or invalid."""

    def __init__(
        self,
        source: str,
        reason: str,
        code: ErrorCode = ErrorCode.DATA_INVALID,
        field: str | None = None,
        cause: Exception | None = None,
    ):
        context = {"reason": reason}
        if field:
            context["field"] = field

        super().__init__(
            message=reason,
            code=code,
            source=source,
            context=context,
            cause=cause,
        )

    @classmethod
    def missing(cls, source: str, field: str) -> "DataError":
        """Create error for missing required column."""
        return cls(
            source=source,
            reason=f"Missing required field: {field}",
            code=ErrorCode.DATA_MISSING,
            field=field,
        )

    @classmethod
    def empty(cls, source: str, description: str = "No data") -> "DataError":
        """Create error for empty result set."""
        return cls(
            source=source,
            reason=description,
            code=ErrorCode.DATA_EMPTY,
        )


class ValidationError(SourceError):
    """Raised when a request to a source is malformed."""

    def __init__(
        self,
        reason: str,
        field: str,
        value: Any = None,
        source: str | None = None,
    ):
        context = {"field": field}
        if value is not None:
            context["value"] = str(value)[:50]

        super().__init__(
            message=reason,
            code=ErrorCode.VALIDATION_PARAM,
            source=source,
            context=context,
        )

    @classmethod
    def invalid_symbol(cls, symbol: str, reason: str = "Invalid format") -> "ValidationError":
        """Create error for invalid symbol."""
        error = cls(
            reason=f"Invalid symbol '{symbol}': {reason}",
            field="symbol",
            value=symbol,
        )
        error.code = ErrorCode.VALIDATION_SYMBOL
        return error


# ============================================================================
# Port
# ============================================================================

@runtime_checkable
class CandleSource(Protocol):
    """
    Protocol for anything that delivers historical candles.

    Implementations must:
    - Return candles ordered by increasing time, already deduplicated
    - Fail explicitly with FetchError or DataError, no silent fallbacks
    """

    @property
    def source_name(self) -> str:
        """Unique identifier for this source."""
        ...

    @abstractmethod
    def fetch_candles(
        self,
        symbol: str,
        interval: str,
        start: date | datetime,
        end: date | datetime,
    ) -> list[Candle]:
        """
        Fetch candles covering [start, end] at the given interval.

        Raises:
            FetchError: If the source cannot be reached
            DataError: If the response holds no usable candles
        """
        ...
