"""Moving average indicators."""

from enum import Enum

from domain.indicators.utils import require_period


class EmaSeed(str, Enum):
    """How the EMA recursion is started."""
    FIRST_VALUE = "first_value"  # seed with values[0], recurse over the whole input
    SMA = "sma"                  # seed with the mean of the first window


def sma(values: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        values: List of values to calculate SMA over
        period: Number of periods for the moving average

    Returns:
        List of len(values) - period + 1 SMA values, or [] for insufficient data

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> sma(prices, 3)
        [11.0, 12.0, 13.0, 14.0]
    """
    require_period(period)
    if len(values) < period:
        return []

    result = []

    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def ema(
    values: list[float],
    period: int,
    seed: EmaSeed = EmaSeed.FIRST_VALUE
) -> list[float]:
    """Calculate Exponential Moving Average.

    Uses exponential smoothing with alpha = 2/(period+1).

    With the default FIRST_VALUE seed the recursion starts at values[0] and
    runs over the entire input; the first (period - 1) values are then
    dropped. With the SMA seed the first output is the mean of the first
    window. Either way the output has len(values) - period + 1 entries.

    Args:
        values: List of values to calculate EMA over
        period: Number of periods for the moving average
        seed: Seeding strategy (default: FIRST_VALUE)

    Returns:
        List of EMA values, or [] for insufficient data

    Example:
        >>> ema([10, 11, 12, 13, 14, 15], 3)
        [11.25, 12.125, 13.0625, 14.03125]
        >>> ema([10, 11, 12, 13, 14, 15], 3, seed=EmaSeed.SMA)
        [11.0, 12.0, 13.0, 14.0]
    """
    require_period(period)
    if len(values) < period:
        return []

    alpha = 2.0 / (period + 1)

    if EmaSeed(seed) is EmaSeed.SMA:
        result = [sum(values[:period]) / period]
        for i in range(period, len(values)):
            result.append((values[i] * alpha) + (result[-1] * (1 - alpha)))
        return result

    smoothed = [values[0]]
    for i in range(1, len(values)):
        smoothed.append((values[i] * alpha) + (smoothed[-1] * (1 - alpha)))

    return smoothed[period - 1:]
