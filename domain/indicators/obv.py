"""On-Balance Volume (OBV) indicator."""

from domain.indicators.utils import require_same_length


def obv(closes: list[float], volumes: list[float]) -> list[float]:
    """Calculate On-Balance Volume.

    OBV is a cumulative indicator that adds volume on up days
    and subtracts volume on down days.

    Args:
        closes: List of closing prices
        volumes: List of volume values

    Returns:
        List of OBV values, one per bar; [] when fewer than 2 bars

    Raises:
        SeriesLengthError: If closes and volumes differ in length

    Example:
        >>> obv([100, 102, 101], [1000, 1200, 1100])
        [1000, 2200, 1100]

    Notes:
        - First value is volumes[0]
        - If price unchanged, volume is not added or subtracted
    """
    n = require_same_length(closes=closes, volumes=volumes)
    if n < 2:
        return []

    result = [volumes[0]]
    cumulative = volumes[0]

    for i in range(1, n):
        if closes[i] > closes[i - 1]:
            cumulative += volumes[i]
        elif closes[i] < closes[i - 1]:
            cumulative -= volumes[i]
        # If equal, cumulative stays the same

        result.append(cumulative)

    return result
