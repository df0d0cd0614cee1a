"""
Indicator orchestrator.

Takes a candle sequence plus the names of the indicators wanted, extracts
the price/volume arrays once and dispatches each request to its indicator
function. The result maps every requested Indicator to either its computed
value or an InsufficientData marker when the history is too short.

Pure and stateless: nothing survives between calls.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from .candles import Candle, parse_candles, to_ohlcv
from .errors import EmptyCandlesError, InvalidParameterError, UnknownIndicatorError
from .indicators import (
    EmaSeed,
    InsufficientData,
    OHLCVData,
    adx,
    atr,
    bollinger_bands,
    cci,
    ema,
    fibonacci_levels,
    macd,
    mfi,
    obv,
    parabolic_sar,
    rsi,
    sma,
    stochastic,
    support_resistance,
    vwap,
    williams_r,
)
from .indicators.utils import require_period

logger = logging.getLogger(__name__)


# ============================================================================
# Indicator kinds
# ============================================================================

class Indicator(str, Enum):
    """Every indicator the orchestrator can dispatch."""
    SMA = "sma"
    EMA = "ema"
    VWAP = "vwap"
    ADX = "adx"
    PARABOLIC_SAR = "parabolic_sar"
    RSI = "rsi"
    MACD = "macd"
    STOCHASTIC = "stochastic"
    WILLIAMS_R = "williams_r"
    CCI = "cci"
    MFI = "mfi"
    BOLLINGER_BANDS = "bollinger_bands"
    ATR = "atr"
    OBV = "obv"
    SUPPORT_RESISTANCE = "support_resistance"
    FIBONACCI = "fibonacci"

    @classmethod
    def parse(cls, name: "str | Indicator") -> "Indicator":
        """
        Resolve a user-facing name to an Indicator.

        Case-insensitive; accepts member names, values and the short
        aliases brokers use (BOLLINGER, SAR).

        Raises:
            UnknownIndicatorError: If the name matches nothing
        """
        if isinstance(name, Indicator):
            return name

        key = str(name).strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        if key in _ALIASES:
            return _ALIASES[key]
        raise UnknownIndicatorError(str(name), known=sorted(cls.__members__) + sorted(_ALIASES))


_ALIASES: dict[str, Indicator] = {
    "BOLLINGER": Indicator.BOLLINGER_BANDS,
    "BBANDS": Indicator.BOLLINGER_BANDS,
    "SAR": Indicator.PARABOLIC_SAR,
    "PSAR": Indicator.PARABOLIC_SAR,
    "STOCH": Indicator.STOCHASTIC,
    "WILLIAMS": Indicator.WILLIAMS_R,
    "SR": Indicator.SUPPORT_RESISTANCE,
    "FIB": Indicator.FIBONACCI,
}

DEFAULT_INDICATORS: tuple[Indicator, ...] = (
    Indicator.RSI,
    Indicator.MACD,
    Indicator.BOLLINGER_BANDS,
)


# ============================================================================
# Parameters (passed in, not imported)
# ============================================================================

@dataclass(frozen=True)
class IndicatorParameters:
    """Default parameters for every dispatchable indicator. Load from config."""

    # Trend
    sma_period: int = 20
    ema_period: int = 20
    adx_period: int = 14
    sar_acceleration: float = 0.02
    sar_maximum: float = 0.2

    # Momentum
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    stochastic_k: int = 14
    stochastic_d: int = 3
    williams_r_period: int = 14
    cci_period: int = 20
    mfi_period: int = 14

    # Volatility
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    atr_period: int = 14

    # Support / resistance
    support_resistance_period: int = 20

    # EMA seeding used by EMA, MACD and ADX
    ema_seed: EmaSeed = EmaSeed.FIRST_VALUE

    def __post_init__(self) -> None:
        for name in _PERIOD_FIELDS:
            require_period(getattr(self, name), name)

        if self.macd_fast >= self.macd_slow:
            raise InvalidParameterError(
                f"macd_fast must be shorter than macd_slow, got {self.macd_fast} >= {self.macd_slow}"
            )
        if not 0 < self.sar_acceleration <= self.sar_maximum:
            raise InvalidParameterError(
                f"sar_acceleration must be > 0 and <= sar_maximum, "
                f"got {self.sar_acceleration} / {self.sar_maximum}"
            )
        if self.bollinger_std_dev < 0:
            raise InvalidParameterError(f"bollinger_std_dev must not be negative, got {self.bollinger_std_dev}")

        try:
            # frozen: normalise "sma" and friends to the enum in place
            object.__setattr__(self, "ema_seed", EmaSeed(self.ema_seed))
        except ValueError as e:
            choices = ", ".join(s.value for s in EmaSeed)
            raise InvalidParameterError(f"ema_seed must be one of {choices}, got {self.ema_seed!r}") from e

    def with_overrides(self, **overrides: Any) -> "IndicatorParameters":
        """
        Copy with some fields replaced, e.g. a per-request RSI period.

        Raises:
            InvalidParameterError: If a key is not a parameter or a value is out of range
        """
        unknown = sorted(set(overrides) - {f.name for f in fields(self)})
        if unknown:
            raise InvalidParameterError(f"Unknown indicator parameter(s): {', '.join(unknown)}")
        return replace(self, **overrides)


_PERIOD_FIELDS = (
    "sma_period", "ema_period", "adx_period", "rsi_period",
    "macd_fast", "macd_slow", "macd_signal", "stochastic_k", "stochastic_d",
    "williams_r_period", "cci_period", "mfi_period",
    "bollinger_period", "atr_period", "support_resistance_period",
)


# ============================================================================
# Lookback and alignment
# ============================================================================

_REQUIRED_BARS: dict[Indicator, Callable[[IndicatorParameters], int]] = {
    Indicator.SMA: lambda p: p.sma_period,
    Indicator.EMA: lambda p: p.ema_period,
    Indicator.VWAP: lambda p: 1,
    Indicator.ADX: lambda p: 2 * p.adx_period,
    Indicator.PARABOLIC_SAR: lambda p: 2,
    Indicator.RSI: lambda p: p.rsi_period + 1,
    Indicator.MACD: lambda p: p.macd_slow + p.macd_signal - 1,
    Indicator.STOCHASTIC: lambda p: p.stochastic_k + p.stochastic_d - 1,
    Indicator.WILLIAMS_R: lambda p: p.williams_r_period,
    Indicator.CCI: lambda p: p.cci_period,
    Indicator.MFI: lambda p: p.mfi_period + 1,
    Indicator.BOLLINGER_BANDS: lambda p: p.bollinger_period,
    Indicator.ATR: lambda p: p.atr_period + 1,
    Indicator.OBV: lambda p: 2,
    Indicator.SUPPORT_RESISTANCE: lambda p: 2 * p.support_resistance_period + 1,
    Indicator.FIBONACCI: lambda p: 1,
}


def required_bars(indicator: Indicator, parameters: IndicatorParameters | None = None) -> int:
    """Minimum number of candles the indicator needs to produce output."""
    parameters = parameters or IndicatorParameters()
    return _REQUIRED_BARS[indicator](parameters)


def series_offsets(indicator: Indicator, parameters: IndicatorParameters | None = None) -> dict[str, int]:
    """
    Input index of each output series' first value.

    Keys are the result's field names ("values" for flat series). Output
    index i of a series pairs with candle index i + offset. Level-type
    results (support/resistance, Fibonacci) carry no series and return {}.
    """
    parameters = parameters or IndicatorParameters()

    if indicator in (Indicator.SUPPORT_RESISTANCE, Indicator.FIBONACCI):
        return {}
    if indicator in (Indicator.VWAP, Indicator.OBV, Indicator.PARABOLIC_SAR):
        return {"values": 0}
    if indicator is Indicator.ADX:
        return {
            "adx": 2 * parameters.adx_period - 1,
            "plus_di": parameters.adx_period,
            "minus_di": parameters.adx_period,
        }

    offset = required_bars(indicator, parameters) - 1
    if indicator is Indicator.MACD:
        return {"macd_line": offset, "signal_line": offset, "histogram": offset}
    if indicator is Indicator.BOLLINGER_BANDS:
        return {"upper_band": offset, "middle_band": offset, "lower_band": offset}
    if indicator is Indicator.STOCHASTIC:
        return {"k_percent": offset, "d_percent": offset}
    return {"values": offset}


# ============================================================================
# Dispatch
# ============================================================================

_DISPATCH: dict[Indicator, Callable[[OHLCVData, IndicatorParameters], Any]] = {
    Indicator.SMA: lambda d, p: sma(d.closes, p.sma_period),
    Indicator.EMA: lambda d, p: ema(d.closes, p.ema_period, p.ema_seed),
    Indicator.VWAP: lambda d, p: vwap(d.highs, d.lows, d.closes, d.volumes),
    Indicator.ADX: lambda d, p: adx(d.highs, d.lows, d.closes, p.adx_period, p.ema_seed),
    Indicator.PARABOLIC_SAR: lambda d, p: parabolic_sar(d.highs, d.lows, p.sar_acceleration, p.sar_maximum),
    Indicator.RSI: lambda d, p: rsi(d.closes, p.rsi_period),
    Indicator.MACD: lambda d, p: macd(d.closes, p.macd_fast, p.macd_slow, p.macd_signal, p.ema_seed),
    Indicator.STOCHASTIC: lambda d, p: stochastic(d.highs, d.lows, d.closes, p.stochastic_k, p.stochastic_d),
    Indicator.WILLIAMS_R: lambda d, p: williams_r(d.highs, d.lows, d.closes, p.williams_r_period),
    Indicator.CCI: lambda d, p: cci(d.highs, d.lows, d.closes, p.cci_period),
    Indicator.MFI: lambda d, p: mfi(d.highs, d.lows, d.closes, d.volumes, p.mfi_period),
    Indicator.BOLLINGER_BANDS: lambda d, p: bollinger_bands(d.closes, p.bollinger_period, p.bollinger_std_dev),
    Indicator.ATR: lambda d, p: atr(d.highs, d.lows, d.closes, p.atr_period),
    Indicator.OBV: lambda d, p: obv(d.closes, d.volumes),
    Indicator.SUPPORT_RESISTANCE: lambda d, p: support_resistance(d.highs, d.lows, p.support_resistance_period),
    Indicator.FIBONACCI: lambda d, p: fibonacci_levels(max(d.highs), min(d.lows)),
}


def resolve_indicators(names: Iterable["str | Indicator"] | None) -> list[Indicator]:
    """
    Parse requested names, dropping duplicates but keeping order.

    Every name is checked before anything is computed, so a bad name never
    produces a partial result.
    """
    if names is None:
        return list(DEFAULT_INDICATORS)
    if isinstance(names, (str, Indicator)):
        names = [names]

    resolved: list[Indicator] = []
    for name in names:
        indicator = Indicator.parse(name)
        if indicator not in resolved:
            resolved.append(indicator)
    return resolved


def _compute(indicator: Indicator, data: OHLCVData, parameters: IndicatorParameters) -> Any:
    """Run one indicator or report that history is too short."""
    required = required_bars(indicator, parameters)
    available = len(data)

    if available < required:
        logger.warning(
            f"Insufficient data for {indicator.value}: need {required} bars, have {available}"
        )
        return InsufficientData(indicator=indicator.value, required=required, available=available)

    logger.debug(f"Computing {indicator.value} over {available} bars")
    return _DISPATCH[indicator](data, parameters)


def compute_indicators(
    candles: Iterable[Candle | Mapping[str, Any] | Sequence[Any]],
    indicators: Iterable["str | Indicator"] | None = None,
    parameters: IndicatorParameters | None = None,
) -> dict[Indicator, Any]:
    """
    Compute a set of indicators over one candle sequence.

    Args:
        candles: Time-ordered candles (or raw broker records to be parsed);
            any iterable, consumed once
        indicators: Names or Indicator members (default: RSI, MACD, Bollinger)
        parameters: Indicator parameters (optional, uses defaults)

    Returns:
        Mapping from Indicator to its result, in request order. A result is
        a list, a NamedTuple of lists/levels, or InsufficientData.

    Raises:
        EmptyCandlesError: If no candles are given
        UnknownIndicatorError: If any requested name is not recognised
    """
    candles = list(candles)
    if not candles:
        raise EmptyCandlesError()

    parameters = parameters or IndicatorParameters()
    requested = resolve_indicators(indicators)

    if not all(isinstance(c, Candle) for c in candles):
        candles = parse_candles(candles)

    data = to_ohlcv(candles)

    results: dict[Indicator, Any] = {}
    for indicator in requested:
        results[indicator] = _compute(indicator, data, parameters)

    logger.debug(
        f"Computed {len(results)} indicator(s) over {len(data)} candles: "
        f"{', '.join(i.value for i in results)}"
    )
    return results


def compute_indicator(
    candles: Sequence[Candle | Mapping[str, Any] | Sequence[Any]],
    indicator: "str | Indicator",
    parameters: IndicatorParameters | None = None,
) -> Any:
    """Compute a single indicator; see compute_indicators."""
    resolved = Indicator.parse(indicator)
    return compute_indicators(candles, [resolved], parameters)[resolved]
