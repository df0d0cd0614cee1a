"""MACD (Moving Average Convergence Divergence) indicator."""

from domain.errors import InvalidParameterError
from domain.indicators.base import MACDResult
from domain.indicators.moving_averages import EmaSeed, ema
from domain.indicators.utils import require_period


def macd(
    closes: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
    seed: EmaSeed = EmaSeed.FIRST_VALUE
) -> MACDResult:
    """Calculate MACD indicator.

    MACD Line = EMA(fast) - EMA(slow)
    Signal Line = EMA(MACD Line, signal periods)
    Histogram = MACD Line - Signal Line

    Args:
        closes: List of closing prices
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line EMA period (default: 9)
        seed: EMA seeding strategy

    Returns:
        MACDResult(macd_line, signal_line, histogram), all trimmed to the
        signal line's length; empty lists for insufficient data

    Example:
        >>> closes = list(range(10, 50))
        >>> result = macd(closes)
        >>> len(result.macd_line) == len(result.signal_line) == len(result.histogram) == 7
        True

    Notes:
        - The fast EMA is longer than the slow one by (slow - fast) values;
          fast_ema[i + slow - fast] lines up with slow_ema[i]
        - Signal line needs 'signal' MACD values, so output index i belongs
          to closes[i + slow + signal - 2]
    """
    require_period(fast, "fast")
    require_period(slow, "slow")
    require_period(signal, "signal")
    if fast >= slow:
        raise InvalidParameterError(f"fast period must be shorter than slow period, got {fast} >= {slow}")

    fast_ema = ema(closes, fast, seed)
    slow_ema = ema(closes, slow, seed)

    if not fast_ema or not slow_ema:
        return MACDResult(macd_line=[], signal_line=[], histogram=[])

    offset = slow - fast
    full_macd = [fast_ema[i + offset] - slow_ema[i] for i in range(len(slow_ema))]

    signal_line = ema(full_macd, signal, seed)
    if not signal_line:
        return MACDResult(macd_line=[], signal_line=[], histogram=[])

    # WHY: signal line is shorter; drop the MACD values it has no partner for
    signal_start = len(full_macd) - len(signal_line)
    macd_line = full_macd[signal_start:]
    histogram = [m - s for m, s in zip(macd_line, signal_line)]

    return MACDResult(macd_line=macd_line, signal_line=signal_line, histogram=histogram)
