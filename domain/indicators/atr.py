"""Average True Range (ATR) indicator."""

from domain.indicators.utils import require_period, require_same_length, true_ranges


def atr(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14
) -> list[float]:
    """Calculate Average True Range using Wilder's smoothing.

    True Range = max(high - low, abs(high - prev_close), abs(low - prev_close))
    ATR = Wilder's smoothed average of True Range

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: ATR period (default: 14)

    Returns:
        List of len(closes) - period ATR values, or [] for insufficient data

    Example:
        >>> highs = [48, 49, 50, 51, 52, 53, 54, 55, 56, 57,
        ...          58, 59, 60, 61, 62]
        >>> lows = [46, 47, 48, 49, 50, 51, 52, 53, 54, 55,
        ...         56, 57, 58, 59, 60]
        >>> closes = [47, 48, 49, 50, 51, 52, 53, 54, 55, 56,
        ...           57, 58, 59, 60, 61]
        >>> atr(highs, lows, closes, 14)
        [2.0]

    Notes:
        - First ATR value is simple average of first 'period' true ranges
        - Subsequent values use Wilder's smoothing
        - result[i] belongs to closes[i + period]
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows, closes=closes)
    if n <= period:
        return []

    tr = true_ranges(highs, lows, closes)

    # WHY: First ATR is simple average of first 'period' true ranges
    atr_value = sum(tr[:period]) / period
    result = [atr_value]

    for value in tr[period:]:
        # Wilder's smoothing formula
        atr_value = (atr_value * (period - 1) + value) / period
        result.append(atr_value)

    return result
