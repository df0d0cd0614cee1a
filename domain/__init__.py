from .errors import (
    IndicatorError,
    EmptyCandlesError,
    UnknownIndicatorError,
    SeriesLengthError,
    InvalidParameterError,
    CandleParseError,
)
from .candles import Candle, parse_candle, parse_candles, to_ohlcv
from .indicators import InsufficientData, OHLCVData, EmaSeed
from .engine import (
    Indicator,
    IndicatorParameters,
    DEFAULT_INDICATORS,
    compute_indicators,
    compute_indicator,
    required_bars,
    series_offsets,
    resolve_indicators,
)

__all__ = [
    # Errors
    "IndicatorError",
    "EmptyCandlesError",
    "UnknownIndicatorError",
    "SeriesLengthError",
    "InvalidParameterError",
    "CandleParseError",
    # Candles
    "Candle",
    "parse_candle",
    "parse_candles",
    "to_ohlcv",
    "OHLCVData",
    # Results
    "InsufficientData",
    "EmaSeed",
    # Orchestrator
    "Indicator",
    "IndicatorParameters",
    "DEFAULT_INDICATORS",
    "compute_indicators",
    "compute_indicator",
    "required_bars",
    "series_offsets",
    "resolve_indicators",
]
