"""Fibonacci retracements and support/resistance levels."""

from domain.indicators.base import FibonacciLevels, PriceLevel, SupportResistance
from domain.indicators.utils import require_period, require_same_length

FIBONACCI_RATIOS = (0.0, 0.236, 0.382, 0.5, 0.618, 0.786, 1.0)


def fibonacci_levels(high: float, low: float) -> FibonacciLevels:
    """Calculate Fibonacci retracement levels between a high and a low.

    Args:
        high: Swing high price
        low: Swing low price

    Returns:
        FibonacciLevels from level_0 (= high) down to level_100 (= low)

    Example:
        >>> levels = fibonacci_levels(high=120, low=100)
        >>> levels.level_0, levels.level_500, levels.level_100
        (120, 110.0, 100)

    Notes:
        - level_x = high - (high - low) * ratio
        - Ratios: 0, 0.236, 0.382, 0.5, 0.618, 0.786, 1
    """
    diff = high - low

    return FibonacciLevels(
        level_0=high,
        level_236=high - diff * 0.236,
        level_382=high - diff * 0.382,
        level_500=high - diff * 0.5,
        level_618=high - diff * 0.618,
        level_786=high - diff * 0.786,
        level_100=low,
    )


def support_resistance(
    highs: list[float],
    lows: list[float],
    period: int = 20
) -> SupportResistance:
    """Find local support and resistance levels.

    A bar is a resistance point when its high is the maximum of the
    2 * period + 1 bars centred on it, and a support point when its low is
    the minimum of that window.

    Args:
        highs: List of high prices
        lows: List of low prices
        period: Bars required on each side of a candidate (default: 20)

    Returns:
        SupportResistance(support, resistance) as lists of PriceLevel in
        input order; empty lists when fewer than 2 * period + 1 bars

    Example:
        >>> highs = [1, 2, 5, 2, 1]
        >>> lows = [0, 1, 4, 1, 0]
        >>> support_resistance(highs, lows, period=2).resistance
        [PriceLevel(index=2, level=5)]

    Notes:
        - The first and last 'period' bars can never qualify
        - A bar can be both support and resistance in a flat window
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows)

    support = []
    resistance = []

    for i in range(period, n - period):
        high_window = highs[i - period:i + period + 1]
        low_window = lows[i - period:i + period + 1]

        if highs[i] == max(high_window):
            resistance.append(PriceLevel(index=i, level=highs[i]))
        if lows[i] == min(low_window):
            support.append(PriceLevel(index=i, level=lows[i]))

    return SupportResistance(support=support, resistance=resistance)
