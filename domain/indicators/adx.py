"""Average Directional Index (ADX) and related indicators."""

from domain.indicators.base import ADXResult
from domain.indicators.moving_averages import EmaSeed, ema
from domain.indicators.utils import require_period, require_same_length, true_ranges


def _directional_movement(
    highs: list[float],
    lows: list[float]
) -> tuple[list[float], list[float]]:
    """+DM and -DM for every bar after the first."""
    plus_dm = []
    minus_dm = []

    for i in range(1, len(highs)):
        up_move = highs[i] - highs[i - 1]
        down_move = lows[i - 1] - lows[i]

        # WHY: only the dominant positive move counts, the other side is 0
        plus_dm.append(up_move if up_move > down_move and up_move > 0 else 0.0)
        minus_dm.append(down_move if down_move > up_move and down_move > 0 else 0.0)

    return plus_dm, minus_dm


def adx(
    highs: list[float],
    lows: list[float],
    closes: list[float],
    period: int = 14,
    seed: EmaSeed = EmaSeed.FIRST_VALUE
) -> ADXResult:
    """Calculate Average Directional Index (ADX), +DI, and -DI.

    ADX measures trend strength (0-100 scale).
    +DI and -DI indicate directional movement.

    Args:
        highs: List of high prices
        lows: List of low prices
        closes: List of closing prices
        period: ADX period (default: 14)
        seed: EMA seeding used for every smoothing step

    Returns:
        ADXResult(adx, plus_di, minus_di); empty lists when fewer than
        2 * period bars are given

    Example:
        >>> highs = [50 + i for i in range(30)]
        >>> lows = [48 + i for i in range(30)]
        >>> closes = [49 + i for i in range(30)]
        >>> result = adx(highs, lows, closes, 14)
        >>> len(result.plus_di), len(result.adx)
        (16, 3)

    Notes:
        - TR, +DM and -DM start at bar 1, so plus_di[i] belongs to bar i + period
        - adx[i] belongs to bar i + 2 * period - 1
        - DI is 0 when smoothed true range is 0, DX is 0 when +DI + -DI is 0
    """
    require_period(period)
    n = require_same_length(highs=highs, lows=lows, closes=closes)

    if n < 2 * period:
        return ADXResult(adx=[], plus_di=[], minus_di=[])

    tr = true_ranges(highs, lows, closes)
    plus_dm, minus_dm = _directional_movement(highs, lows)

    smoothed_tr = ema(tr, period, seed)
    smoothed_plus_dm = ema(plus_dm, period, seed)
    smoothed_minus_dm = ema(minus_dm, period, seed)

    plus_di = []
    minus_di = []
    for s_tr, s_plus, s_minus in zip(smoothed_tr, smoothed_plus_dm, smoothed_minus_dm):
        if s_tr == 0:
            plus_di.append(0.0)
            minus_di.append(0.0)
        else:
            plus_di.append(100.0 * s_plus / s_tr)
            minus_di.append(100.0 * s_minus / s_tr)

    dx = []
    for p_di, m_di in zip(plus_di, minus_di):
        di_sum = p_di + m_di
        if di_sum == 0:
            dx.append(0.0)
        else:
            dx.append(100.0 * abs(p_di - m_di) / di_sum)

    adx_values = ema(dx, period, seed)

    return ADXResult(adx=adx_values, plus_di=plus_di, minus_di=minus_di)
