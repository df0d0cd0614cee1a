from .sources import (
    CandleSource,
    SourceError,
    FetchError,
    DataError,
    ValidationError,
    ErrorCode,
)

__all__ = [
    "CandleSource",
    "SourceError",
    "FetchError",
    "DataError",
    "ValidationError",
    "ErrorCode",
]
