"""
Yahoo Finance candle source.

Pulls historical OHLCV bars through yfinance. No API key required.
"""

import logging
import math
from datetime import date, datetime
from typing import Any

import yfinance as yf

from config import get_config
from domain import Candle
from ports import DataError, FetchError, ValidationError

logger = logging.getLogger(__name__)

# Intervals yfinance accepts for history()
VALID_INTERVALS = frozenset({
    "1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h",
    "1d", "5d", "1wk", "1mo", "3mo",
})

REQUIRED_COLUMNS = ("Open", "High", "Low", "Close")


class YahooCandleSource:
    """
    Candle source backed by yfinance.

    Rows with a missing close are dropped; everything else is passed
    through in the order Yahoo returns it (oldest first).
    """

    def __init__(self, auto_adjust: bool | None = None):
        if auto_adjust is None:
            auto_adjust = get_config().data_source.auto_adjust
        self.auto_adjust = auto_adjust

    @property
    def source_name(self) -> str:
        return "yahoo"

    def _validate(self, symbol: str, interval: str) -> None:
        if not symbol or not symbol.strip() or len(symbol) > 20:
            raise ValidationError.invalid_symbol(symbol or "")
        if interval not in VALID_INTERVALS:
            raise ValidationError(
                reason=f"Unsupported interval '{interval}'",
                field="interval",
                value=interval,
                source=self.source_name,
            )

    def _history(self, symbol: str, interval: str, start: date | datetime, end: date | datetime) -> Any:
        try:
            return yf.Ticker(symbol).history(
                start=start,
                end=end,
                interval=interval,
                auto_adjust=self.auto_adjust,
            )
        except Exception as e:
            raise FetchError(self.source_name, f"History request failed for {symbol}: {e}", cause=e) from e

    def fetch_candles(
        self,
        symbol: str,
        interval: str,
        start: date | datetime,
        end: date | datetime,
    ) -> list[Candle]:
        """
        Fetch candles for symbol between start and end.

        Raises:
            ValidationError: If symbol or interval is malformed
            FetchError: If yfinance raises
            DataError: If no usable rows come back
        """
        symbol = symbol.strip().upper() if symbol else symbol
        self._validate(symbol, interval)

        logger.info(f"Fetching {interval} candles for {symbol} from {start} to {end}")
        frame = self._history(symbol, interval, start, end)

        if frame is None or frame.empty:
            raise DataError.empty(self.source_name, f"No candles for {symbol} ({interval})")

        for column in REQUIRED_COLUMNS:
            if column not in frame.columns:
                raise DataError.missing(self.source_name, column)

        has_volume = "Volume" in frame.columns
        candles = []
        skipped = 0

        for ts, row in frame.iterrows():
            close = row["Close"]
            if close is None or math.isnan(close):
                skipped += 1
                continue

            candles.append(Candle(
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=float(close),
                volume=float(row["Volume"]) if has_volume and not math.isnan(row["Volume"]) else 0.0,
                timestamp=ts.to_pydatetime() if hasattr(ts, "to_pydatetime") else ts,
            ))

        if skipped:
            logger.warning(f"Dropped {skipped} {symbol} row(s) with no close price")

        if not candles:
            raise DataError.empty(self.source_name, f"No usable candles for {symbol} ({interval})")

        logger.debug(f"Fetched {len(candles)} candles for {symbol}")
        return candles
