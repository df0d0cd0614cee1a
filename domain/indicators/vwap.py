"""Volume Weighted Average Price (VWAP) indicator."""

from domain.indicators.utils import require_same_length, typical_prices


def vwap(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    volumes: list[float]
) -> list[float]:
    """Calculate Volume Weighted Average Price.

    VWAP = Cumulative(Typical Price * Volume) / Cumulative(Volume)
    Typical Price = (High + Low + Close) / 3

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        volumes: List of volume values

    Returns:
        List of VWAP values, one per input bar

    Example:
        >>> highs = [102, 103, 104]
        >>> lows = [100, 101, 102]
        >>> closes = [101, 102, 103]
        >>> volumes = [1000, 1500, 1200]
        >>> result = vwap(highs, lows, closes, volumes)
        >>> len(result) == 3
        True

    Notes:
        - Cumulative over the whole input, no daily reset
        - While cumulative volume is still zero the bar's typical price is emitted
    """
    n = require_same_length(highs=highs, lows=lows, closes=closes, volumes=volumes)
    if n == 0:
        return []

    result = []
    cumulative_tp_volume = 0.0
    cumulative_volume = 0.0

    for typical_price, volume in zip(typical_prices(highs, lows, closes), volumes):
        cumulative_tp_volume += typical_price * volume
        cumulative_volume += volume

        if cumulative_volume > 0:
            result.append(cumulative_tp_volume / cumulative_volume)
        else:
            result.append(typical_price)

    return result
