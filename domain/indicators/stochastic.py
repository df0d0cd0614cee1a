"""Stochastic Oscillator indicators."""

from domain.indicators.base import StochasticResult
from domain.indicators.moving_averages import sma
from domain.indicators.utils import highest, lowest, require_period, require_same_length


def stochastic(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    k_period: int = 14,
    d_period: int = 3
) -> StochasticResult:
    """Calculate Stochastic Oscillator (%K and %D).

    %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)
    %D = SMA of %K

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        k_period: Lookback period for %K (default: 14)
        d_period: SMA period for %D (default: 3)

    Returns:
        StochasticResult(k_percent, d_percent) of equal length; empty lists
        for insufficient data

    Example:
        >>> highs = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64, 65]
        >>> lows = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]
        >>> closes = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
        >>> result = stochastic(highs, lows, closes, 14, 3)
        >>> len(result.k_percent), len(result.d_percent)
        (1, 1)

    Notes:
        - Returns values on 0-100 scale
        - %K is 0 when the window's high equals its low
        - %K is trimmed by (d_period - 1) so both lists pair index for index;
          output index i belongs to closes[i + k_period + d_period - 2]
    """
    require_period(k_period, "k_period")
    require_period(d_period, "d_period")
    n = require_same_length(highs=highs, lows=lows, closes=closes)

    if n < k_period + d_period - 1:
        return StochasticResult(k_percent=[], d_percent=[])

    highest_highs = highest(highs, k_period)
    lowest_lows = lowest(lows, k_period)

    k_values = []
    for i, (highest_high, lowest_low) in enumerate(zip(highest_highs, lowest_lows)):
        close = closes[i + k_period - 1]
        # WHY: Prevent division by zero in flat markets
        if highest_high == lowest_low:
            k_values.append(0.0)
        else:
            k_values.append(100.0 * (close - lowest_low) / (highest_high - lowest_low))

    d_values = sma(k_values, d_period)

    return StochasticResult(k_percent=k_values[d_period - 1:], d_percent=d_values)
