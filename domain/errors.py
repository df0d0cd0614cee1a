"""Error types raised by the indicator engine.

All errors derive from ValueError so callers that only guard against bad
input keep working.
"""


class IndicatorError(ValueError):
    """Base class for indicator engine errors."""


class EmptyCandlesError(IndicatorError):
    """Raised when the orchestrator is given no candles at all."""

    def __init__(self, message: str = "No historical data provided"):
        super().__init__(message)


class UnknownIndicatorError(IndicatorError):
    """Raised for an indicator name the engine does not recognise."""

    def __init__(self, name: str, known: list[str] | None = None):
        self.name = name
        self.known = known or []
        message = f"Unknown indicator: {name!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)


class SeriesLengthError(IndicatorError):
    """Raised when parallel input series do not have the same length."""


class InvalidParameterError(IndicatorError):
    """Raised for periods or factors an indicator cannot work with."""


class CandleParseError(IndicatorError):
    """Raised when a raw candle record cannot be turned into a Candle."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"Candle {index}: {message}"
        super().__init__(message)
