"""Parabolic SAR (stop and reverse) indicator."""

from domain.errors import InvalidParameterError
from domain.indicators.utils import require_same_length

UPTREND = 1
DOWNTREND = -1


def parabolic_sar(
    highs: list[float],
    lows: list[float],
    acceleration: float = 0.02,
    maximum: float = 0.2
) -> list[float]:
    """Calculate Parabolic SAR.

    Two-state machine (uptrend / downtrend) carrying the SAR, the extreme
    point (EP) and the acceleration factor (AF) from bar to bar:

        candidate = prev_sar + af * (ep - prev_sar)

    In an uptrend the candidate may not rise above the previous one or two
    lows; in a downtrend it may not fall below the previous one or two highs.
    When price crosses the candidate the trend flips, SAR jumps to the old
    EP, EP resets to the crossing bar's opposite extreme and AF resets. A
    new extreme without a flip moves EP and bumps AF by acceleration, capped
    at maximum.

    Args:
        highs: List of high prices
        lows: List of low prices
        acceleration: AF start value and step (default: 0.02)
        maximum: AF ceiling (default: 0.2)

    Returns:
        List of SAR values, one per input bar (first value = lows[0]);
        [] when fewer than 2 bars

    Example:
        >>> highs = [10, 11, 12, 13, 14]
        >>> lows = [9, 10, 11, 12, 13]
        >>> sar = parabolic_sar(highs, lows)
        >>> sar[0]
        9
        >>> all(s < l for s, l in zip(sar[1:], lows[1:]))
        True

    Notes:
        - Always starts in an uptrend with EP = highs[0]
        - State lives only for the duration of one call
    """
    if acceleration <= 0 or maximum < acceleration:
        raise InvalidParameterError(
            f"acceleration must be > 0 and <= maximum, got {acceleration} / {maximum}"
        )

    n = require_same_length(highs=highs, lows=lows)
    if n < 2:
        return []

    trend = UPTREND
    af = acceleration
    ep = highs[0]
    result = [lows[0]]

    for i in range(1, n):
        prev_sar = result[-1]
        sar = prev_sar + af * (ep - prev_sar)
        # bar i - 2 only exists from the third bar on
        back = i - 2 if i > 1 else i - 1

        if trend == UPTREND:
            sar = min(sar, lows[i - 1], lows[back])

            if lows[i] <= sar:
                trend = DOWNTREND
                sar = ep
                ep = lows[i]
                af = acceleration
            elif highs[i] > ep:
                ep = highs[i]
                af = min(af + acceleration, maximum)
        else:
            sar = max(sar, highs[i - 1], highs[back])

            if highs[i] >= sar:
                trend = UPTREND
                sar = ep
                ep = highs[i]
                af = acceleration
            elif lows[i] < ep:
                ep = lows[i]
                af = min(af + acceleration, maximum)

        result.append(sar)

    return result
