"""
JSON API response types.

Structured responses for the response-formatting layer. Every series is
published with its offset and the timestamps of the candles it pairs with,
so consumers never re-derive the alignment rule.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, Literal, Sequence

from pydantic import BaseModel

from domain import Candle, Indicator, IndicatorParameters, InsufficientData, series_offsets
from domain.indicators import FibonacciLevels, PriceLevel, SupportResistance
from orchestration.technical_analysis import TechnicalReport


# ============================================================================
# Response Models
# ============================================================================

class CandleResponse(BaseModel):
    """API response for a candle."""
    open: float
    high: float
    low: float
    close: float
    volume: float
    timestamp: datetime | None = None


class SeriesResponse(BaseModel):
    """One aligned numeric series; values[i] belongs to candle offset + i."""
    name: str
    offset: int
    values: list[float]
    timestamps: list[datetime | None]


class LevelResponse(BaseModel):
    """A support or resistance level."""
    index: int
    level: float
    timestamp: datetime | None = None


class IndicatorResponse(BaseModel):
    """API response for one indicator."""
    indicator: str
    status: Literal["ok", "insufficient_data"]
    series: list[SeriesResponse] = []

    # Support / resistance
    support: list[LevelResponse] | None = None
    resistance: list[LevelResponse] | None = None

    # Fibonacci
    levels: dict[str, float] | None = None

    # Insufficient data
    required_bars: int | None = None
    available_bars: int | None = None


class TechnicalReportResponse(BaseModel):
    """Full technical analysis API response."""
    symbol: str
    interval: str
    source: str
    start: datetime | str
    end: datetime | str
    generated_at: datetime
    parameters: dict[str, Any]
    candles: list[CandleResponse]
    indicators: list[IndicatorResponse]


# ============================================================================
# Conversion Functions
# ============================================================================

def _timestamps(candles: Sequence[Candle], offset: int, count: int) -> list[datetime | None]:
    return [candles[offset + i].timestamp for i in range(count)]


def _series_response(
    name: str,
    values: list[float],
    offset: int,
    candles: Sequence[Candle],
) -> SeriesResponse:
    return SeriesResponse(
        name=name,
        offset=offset,
        values=values,
        timestamps=_timestamps(candles, offset, len(values)),
    )


def _level_to_response(level: PriceLevel, candles: Sequence[Candle]) -> LevelResponse:
    return LevelResponse(
        index=level.index,
        level=level.level,
        timestamp=candles[level.index].timestamp,
    )


def indicator_to_response(
    indicator: Indicator,
    result: Any,
    candles: Sequence[Candle],
    parameters: IndicatorParameters | None = None,
) -> IndicatorResponse:
    """Convert one engine result to its API response."""
    if isinstance(result, InsufficientData):
        return IndicatorResponse(
            indicator=indicator.value,
            status="insufficient_data",
            required_bars=result.required,
            available_bars=result.available,
        )

    if isinstance(result, SupportResistance):
        return IndicatorResponse(
            indicator=indicator.value,
            status="ok",
            support=[_level_to_response(lvl, candles) for lvl in result.support],
            resistance=[_level_to_response(lvl, candles) for lvl in result.resistance],
        )

    if isinstance(result, FibonacciLevels):
        return IndicatorResponse(
            indicator=indicator.value,
            status="ok",
            levels=dict(result._asdict()),
        )

    offsets = series_offsets(indicator, parameters)
    if isinstance(result, list):
        series = [_series_response(indicator.value, result, offsets["values"], candles)]
    else:
        series = [
            _series_response(name, getattr(result, name), offset, candles)
            for name, offset in offsets.items()
        ]

    return IndicatorResponse(indicator=indicator.value, status="ok", series=series)


def to_api_response(report: TechnicalReport) -> TechnicalReportResponse:
    """Convert a TechnicalReport to its API response."""
    return TechnicalReportResponse(
        symbol=report.symbol,
        interval=report.interval,
        source=report.source,
        start=report.start if isinstance(report.start, datetime) else report.start.isoformat(),
        end=report.end if isinstance(report.end, datetime) else report.end.isoformat(),
        generated_at=report.generated_at,
        parameters=asdict(report.parameters),
        candles=[CandleResponse(**c.model_dump()) for c in report.candles],
        indicators=[
            indicator_to_response(indicator, result, report.candles, report.parameters)
            for indicator, result in report.indicators.items()
        ],
    )


def to_json(report: TechnicalReport) -> dict[str, Any]:
    """Convert report to a JSON-serializable dict."""
    response = to_api_response(report)
    return response.model_dump(mode="json")
