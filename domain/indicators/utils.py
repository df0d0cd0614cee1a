"""Utility functions shared by the indicator modules."""

from domain.errors import InvalidParameterError, SeriesLengthError


def require_same_length(**series: list[float]) -> int:
    """Check that every named series has the same length.

    Args:
        **series: Series keyed by the argument name used in error messages

    Returns:
        The common length

    Raises:
        SeriesLengthError: If any two series differ in length

    Example:
        >>> require_same_length(highs=[1, 2], lows=[0, 1])
        2
    """
    lengths = {name: len(values) for name, values in series.items()}
    distinct = set(lengths.values())
    if len(distinct) > 1:
        detail = ", ".join(f"{name}={n}" for name, n in lengths.items())
        raise SeriesLengthError(f"Input series must have same length ({detail})")
    return distinct.pop() if distinct else 0


def require_period(period: int, name: str = "period") -> None:
    """Reject non-positive lookback periods."""
    if not isinstance(period, int) or period <= 0:
        raise InvalidParameterError(f"{name} must be a positive integer, got {period!r}")


def highest(values: list[float], period: int) -> list[float]:
    """Highest value of each full rolling window.

    Example:
        >>> highest([10, 12, 11, 15, 14, 13], 3)
        [12, 15, 15, 15]

    Notes:
        - Output index i covers values[i:i + period]
        - Returns [] when fewer than period values
    """
    if len(values) < period:
        return []
    return [max(values[i - period + 1:i + 1]) for i in range(period - 1, len(values))]


def lowest(values: list[float], period: int) -> list[float]:
    """Lowest value of each full rolling window.

    Example:
        >>> lowest([10, 12, 11, 15, 14, 13], 3)
        [10, 11, 11, 13]
    """
    if len(values) < period:
        return []
    return [min(values[i - period + 1:i + 1]) for i in range(period - 1, len(values))]


def true_ranges(highs: list[float], lows: list[float], closes: list[float]) -> list[float]:
    """True range for every bar after the first.

    True Range = max(high - low, |high - prev_close|, |low - prev_close|)

    Returns:
        List of len(closes) - 1 values; tr[i] belongs to bar i + 1
    """
    result = []
    for i in range(1, len(closes)):
        high_low = highs[i] - lows[i]
        high_prev_close = abs(highs[i] - closes[i - 1])
        low_prev_close = abs(lows[i] - closes[i - 1])
        result.append(max(high_low, high_prev_close, low_prev_close))
    return result


def typical_prices(highs: list[float], lows: list[float], closes: list[float]) -> list[float]:
    """(High + Low + Close) / 3 per bar."""
    return [(h + l + c) / 3.0 for h, l, c in zip(highs, lows, closes)]
