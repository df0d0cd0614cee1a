"""Bollinger Bands indicator."""

from domain.errors import InvalidParameterError
from domain.indicators.base import BollingerBands
from domain.indicators.moving_averages import sma
from domain.indicators.utils import require_period


def bollinger_bands(
    closes: list[float],
    period: int = 20,
    std_dev: float = 2.0
) -> BollingerBands:
    """Calculate Bollinger Bands.

    Upper Band = SMA + (std_dev * standard_deviation)
    Middle Band = SMA
    Lower Band = SMA - (std_dev * standard_deviation)

    Args:
        closes: List of closing prices
        period: Period for SMA and standard deviation (default: 20)
        std_dev: Number of standard deviations for bands (default: 2.0)

    Returns:
        BollingerBands(upper_band, middle_band, lower_band), each with
        len(closes) - period + 1 values; empty lists for insufficient data

    Example:
        >>> prices = [20, 21, 22, 23, 24, 25, 24, 23, 22, 21,
        ...           20, 21, 22, 23, 24, 25, 26, 27, 28, 29,
        ...           30, 29, 28, 27, 26]
        >>> bands = bollinger_bands(prices, period=20)
        >>> bands.middle_band[-1]  # Most recent SMA
        25.0

    Notes:
        - Population standard deviation (divide by period)
    """
    require_period(period)
    if std_dev < 0:
        raise InvalidParameterError(f"std_dev must not be negative, got {std_dev}")

    middle_band = sma(closes, period)
    if not middle_band:
        return BollingerBands(upper_band=[], middle_band=[], lower_band=[])

    upper_band = []
    lower_band = []

    for i, mean in enumerate(middle_band):
        window = closes[i:i + period]
        variance = sum((x - mean) ** 2 for x in window) / period
        std = variance ** 0.5

        upper_band.append(mean + (std_dev * std))
        lower_band.append(mean - (std_dev * std))

    return BollingerBands(upper_band=upper_band, middle_band=middle_band, lower_band=lower_band)
