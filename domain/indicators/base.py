"""Base types for technical indicators."""

from dataclasses import dataclass
from typing import NamedTuple


@dataclass
class OHLCVData:
    """Standard OHLCV price data.

    Attributes:
        opens: List of opening prices
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        volumes: List of volume data

    Example:
        >>> data = OHLCVData(
        ...     opens=[100.0, 101.0, 102.0],
        ...     highs=[102.0, 103.0, 104.0],
        ...     lows=[99.0, 100.0, 101.0],
        ...     closes=[101.0, 102.0, 103.0],
        ...     volumes=[1000000, 1100000, 1200000]
        ... )
    """
    opens: list[float]
    highs: list[float]
    lows: list[float]
    closes: list[float]
    volumes: list[float]

    def __len__(self) -> int:
        return len(self.closes)


class MACDResult(NamedTuple):
    """MACD line, signal line and histogram, all the same length."""
    macd_line: list[float]
    signal_line: list[float]
    histogram: list[float]


class BollingerBands(NamedTuple):
    """Upper, middle and lower bands, all the same length."""
    upper_band: list[float]
    middle_band: list[float]
    lower_band: list[float]


class ADXResult(NamedTuple):
    """ADX with its directional indicators.

    plus_di and minus_di are longer than adx: adx[i] pairs with
    plus_di[i + period - 1].
    """
    adx: list[float]
    plus_di: list[float]
    minus_di: list[float]


class StochasticResult(NamedTuple):
    """%K and %D trimmed to the same length."""
    k_percent: list[float]
    d_percent: list[float]


class PriceLevel(NamedTuple):
    """A support or resistance level found at an input index."""
    index: int
    level: float


class SupportResistance(NamedTuple):
    """Local extrema levels."""
    support: list[PriceLevel]
    resistance: list[PriceLevel]


class FibonacciLevels(NamedTuple):
    """Retracement levels from high (level_0) down to low (level_100)."""
    level_0: float
    level_236: float
    level_382: float
    level_500: float
    level_618: float
    level_786: float
    level_100: float


@dataclass(frozen=True)
class InsufficientData:
    """Marker returned instead of a series when history is too short.

    Lets callers tell "not enough bars" apart from a computed result.
    """
    indicator: str
    required: int
    available: int

    def __str__(self) -> str:
        return (
            f"{self.indicator}: needs at least {self.required} bars, "
            f"got {self.available}"
        )
