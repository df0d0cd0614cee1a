"""
Technical analysis service.

Coordinates:
1. Candle fetching (any CandleSource)
2. Indicator computation (domain.engine)
3. Report assembly for the presentation layer

Per-symbol work shares no state, so several symbols can be analysed in
parallel threads.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError

from config import EngineConfig, IndicatorsConfig, get_config
from domain import (
    Candle,
    Indicator,
    IndicatorParameters,
    InsufficientData,
    InvalidParameterError,
    compute_indicators,
    resolve_indicators,
)
from ports import CandleSource, DataError, SourceError

logger = logging.getLogger(__name__)


@dataclass
class TechnicalReport:
    """Candles for one symbol plus the indicators computed over them."""
    symbol: str
    interval: str
    start: date | datetime
    end: date | datetime
    source: str
    candles: list[Candle]
    indicators: dict[Indicator, Any]
    parameters: IndicatorParameters
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def insufficient(self) -> list[InsufficientData]:
        """Indicators that could not be computed for lack of history."""
        return [r for r in self.indicators.values() if isinstance(r, InsufficientData)]

    @property
    def is_complete(self) -> bool:
        return not self.insufficient


class TechnicalAnalysisService:
    """
    Fetch candles and run the indicator engine over them.

    Example:
        >>> service = TechnicalAnalysisService(YahooCandleSource())
        >>> report = service.analyze("AAPL", indicators=["RSI", "ATR"], rsi_period=21)
    """

    def __init__(self, source: CandleSource, config: EngineConfig | None = None):
        self.source = source
        self.config = config or get_config()

    def _parameters(self, overrides: dict[str, Any]) -> IndicatorParameters:
        if not overrides:
            return self.config.indicators.to_parameters()

        unknown = sorted(set(overrides) - set(IndicatorsConfig.model_fields))
        if unknown:
            raise InvalidParameterError(f"Unknown indicator parameter(s): {', '.join(unknown)}")
        try:
            merged = IndicatorsConfig.model_validate({**self.config.indicators.model_dump(), **overrides})
        except PydanticValidationError as e:
            err = e.errors()[0]
            field_name = ".".join(str(loc) for loc in err["loc"]) or "indicators"
            raise InvalidParameterError(f"{field_name}: {err['msg']}") from e
        return merged.to_parameters()

    def _window(
        self,
        start: date | datetime | None,
        end: date | datetime | None,
    ) -> tuple[date | datetime, date | datetime]:
        if end is None:
            # plain dates and datetimes do not compare, so match the start's type
            if isinstance(start, datetime):
                end = datetime.now(start.tzinfo)
            else:
                end = date.today() if isinstance(start, date) else datetime.now()
        start = start or end - timedelta(days=self.config.data_source.lookback_days)

        # A plain date next to a datetime means midnight in the datetime's zone
        if isinstance(start, datetime) and not isinstance(end, datetime):
            end = datetime.combine(end, time.min, tzinfo=start.tzinfo)
        elif isinstance(end, datetime) and not isinstance(start, datetime):
            start = datetime.combine(start, time.min, tzinfo=end.tzinfo)

        try:
            ordered = start < end
        except TypeError as e:
            raise InvalidParameterError(
                f"start and end must both be timezone-aware or both naive, got {start} and {end}"
            ) from e
        if not ordered:
            raise InvalidParameterError(f"start must be before end, got {start} >= {end}")
        return start, end

    def analyze(
        self,
        symbol: str,
        interval: str | None = None,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        indicators: Iterable["str | Indicator"] | None = None,
        **overrides: Any,
    ) -> TechnicalReport:
        """
        Analyse one symbol.

        Args:
            symbol: Instrument symbol understood by the source
            interval: Candle interval (default from config)
            start: Window start (default: end - lookback_days)
            end: Window end (default: now)
            indicators: Indicator names (default from config)
            **overrides: IndicatorParameters fields for this request only

        Raises:
            UnknownIndicatorError: If an indicator name is not recognised
            InvalidParameterError: If an override or the date window is invalid
            SourceError: If the candle source fails
        """
        requested = resolve_indicators(indicators if indicators is not None else self.config.default_indicators)
        parameters = self._parameters(overrides)
        interval = interval or self.config.data_source.default_interval
        start, end = self._window(start, end)

        candles = self.source.fetch_candles(symbol, interval, start, end)
        if not candles:
            raise DataError.empty(self.source.source_name, f"No historical data available for {symbol}")

        logger.info(
            f"Analysing {symbol}: {len(candles)} {interval} candles, "
            f"indicators={[i.value for i in requested]}"
        )
        results = compute_indicators(candles, requested, parameters)

        report = TechnicalReport(
            symbol=symbol,
            interval=interval,
            start=start,
            end=end,
            source=self.source.source_name,
            candles=candles,
            indicators=results,
            parameters=parameters,
        )
        for marker in report.insufficient:
            logger.warning(f"{symbol}: {marker}")
        return report

    def analyze_many(
        self,
        symbols: Iterable[str],
        max_workers: int = 4,
        **kwargs: Any,
    ) -> dict[str, TechnicalReport | SourceError]:
        """
        Analyse several symbols in parallel.

        Source failures are collected per symbol instead of aborting the
        batch; engine errors (bad names or parameters) still raise.
        """
        symbols = list(dict.fromkeys(symbols))
        results: dict[str, TechnicalReport | SourceError] = {}

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(self.analyze, symbol, **kwargs): symbol for symbol in symbols}

            for future in as_completed(futures):
                symbol = futures[future]
                try:
                    results[symbol] = future.result()
                except SourceError as e:
                    logger.error(f"{symbol}: {e}")
                    results[symbol] = e

        # Keep the caller's order
        return {symbol: results[symbol] for symbol in symbols}
