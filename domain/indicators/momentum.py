"""Momentum indicators."""

from domain.indicators.moving_averages import sma
from domain.indicators.utils import (
    highest,
    lowest,
    require_period,
    require_same_length,
    typical_prices,
)


def williams_r(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14
) -> list[float]:
    """Calculate Williams %R.

    Williams %R = -100 * (Highest High - Close) / (Highest High - Lowest Low)

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: Lookback period (default: 14)

    Returns:
        List of len(closes) - period + 1 Williams %R values (-100 to 0)

    Example:
        >>> highs = [50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63, 64]
        >>> lows = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62]
        >>> closes = [49, 50, 51, 52, 53, 54, 55, 56, 57, 58, 59, 60, 61, 62, 63]
        >>> result = williams_r(highs, lows, closes, 14)
        >>> -100 <= result[-1] <= 0
        True

    Notes:
        - Values range from -100 (oversold) to 0 (overbought)
        - Mirror of Stochastic %K: %R = %K - 100
        - 0 when the window's high equals its low
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows, closes=closes)
    if n < period:
        return []

    result = []
    for i, (highest_high, lowest_low) in enumerate(zip(highest(highs, period), lowest(lows, period))):
        close = closes[i + period - 1]
        # WHY: Prevent division by zero in flat markets
        if highest_high == lowest_low:
            result.append(0.0)
        else:
            result.append(-100.0 * (highest_high - close) / (highest_high - lowest_low))

    return result


def cci(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 20
) -> list[float]:
    """Calculate Commodity Channel Index.

    CCI = (Typical Price - SMA of Typical Price) / (0.015 * Mean Deviation)
    Typical Price = (High + Low + Close) / 3

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: CCI period (default: 20)

    Returns:
        List of len(closes) - period + 1 CCI values

    Example:
        >>> highs = [102] * 25
        >>> lows = [98] * 25
        >>> closes = [100] * 25
        >>> result = cci(highs, lows, closes, 20)
        >>> result[-1]
        0.0

    Notes:
        - Oscillator with no bounded range (typically -200 to +200)
        - 0.015 constant ensures ~70-80% of values fall between -100 and +100
        - 0 when the mean deviation is 0
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows, closes=closes)
    if n < period:
        return []

    tp = typical_prices(highs, lows, closes)
    sma_tp = sma(tp, period)

    result = []
    for i, mean in enumerate(sma_tp):
        tp_window = tp[i:i + period]
        mean_deviation = sum(abs(value - mean) for value in tp_window) / period

        # WHY: Prevent division by zero
        if mean_deviation == 0:
            result.append(0.0)
        else:
            result.append((tp[i + period - 1] - mean) / (0.015 * mean_deviation))

    return result


def mfi(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    volumes: list[float],
    period: int = 14
) -> list[float]:
    """Calculate Money Flow Index.

    Raw Money Flow = Typical Price * Volume
    Money Ratio = Positive Flow / Negative Flow over the window
    MFI = 100 - 100 / (1 + Money Ratio)

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        volumes: List of volume values
        period: Lookback period (default: 14)

    Returns:
        List of len(closes) - period MFI values (0-100)

    Example:
        >>> highs = [10 + i for i in range(16)]
        >>> lows = [8 + i for i in range(16)]
        >>> closes = [9 + i for i in range(16)]
        >>> volumes = [1000] * 16
        >>> result = mfi(highs, lows, closes, volumes, 14)
        >>> len(result)
        2

    Notes:
        - A bar's flow is positive when its typical price rose vs. the prior
          bar, negative when it fell, and ignored when unchanged
        - Money ratio defaults to 100 when negative flow is 0
        - result[i] belongs to closes[i + period]
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows, closes=closes, volumes=volumes)
    if n <= period:
        return []

    tp = typical_prices(highs, lows, closes)
    raw_money_flow = [price * volume for price, volume in zip(tp, volumes)]

    result = []
    for i in range(period, n):
        positive_flow = 0.0
        negative_flow = 0.0

        for j in range(i - period + 1, i + 1):
            if tp[j] > tp[j - 1]:
                positive_flow += raw_money_flow[j]
            elif tp[j] < tp[j - 1]:
                negative_flow += raw_money_flow[j]

        money_ratio = positive_flow / negative_flow if negative_flow != 0 else 100.0
        result.append(100.0 - (100.0 / (1.0 + money_ratio)))

    return result
