"""
Candle model and parsing of broker candle payloads.

Brokers hand back historical bars in a few shapes:
- mappings with long keys (open, high, low, close, volume, timestamp)
- mappings with short keys (o, h, l, c, v, t)
- positional rows [timestamp, open, high, low, close, volume]

Numbers may arrive as strings. Everything is normalised to Candle here so
the indicator code only ever sees floats.
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import CandleParseError
from .indicators.base import OHLCVData

logger = logging.getLogger(__name__)

# "+0530" style offsets need a colon before pydantic will parse them
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")

ROW_FIELDS = ("timestamp", "open", "high", "low", "close", "volume")


class Candle(BaseModel):
    """
    One OHLCV bar.

    Immutable once built. Volume defaults to 0 for feeds that omit it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    open: float = Field(validation_alias=AliasChoices("open", "o"))
    high: float = Field(validation_alias=AliasChoices("high", "h"))
    low: float = Field(validation_alias=AliasChoices("low", "l"))
    close: float = Field(validation_alias=AliasChoices("close", "c"))
    volume: float = Field(default=0.0, validation_alias=AliasChoices("volume", "v"))
    timestamp: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("timestamp", "t", "time", "date"),
    )

    @field_validator("volume", mode="before")
    @classmethod
    def missing_volume_is_zero(cls, v: Any) -> Any:
        if v is None or v == "":
            return 0.0
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def normalise_offset(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _COMPACT_OFFSET.sub(r"\1:\2", v.strip())
        return v


def _row_to_mapping(row: Sequence[Any]) -> dict[str, Any]:
    """Map a positional [ts, o, h, l, c, v] row onto field names."""
    if len(row) < 5:
        raise ValueError(f"expected at least 5 columns, got {len(row)}")
    return dict(zip(ROW_FIELDS, row))


def parse_candle(record: Candle | Mapping[str, Any] | Sequence[Any], index: int | None = None) -> Candle:
    """
    Build a Candle from any supported record shape.

    Raises:
        CandleParseError: If the record is missing fields or holds non-numeric prices
    """
    if isinstance(record, Candle):
        return record

    try:
        if isinstance(record, Mapping):
            return Candle.model_validate(dict(record))
        if isinstance(record, Sequence) and not isinstance(record, (str, bytes)):
            return Candle.model_validate(_row_to_mapping(record))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", []))
        raise CandleParseError(f"{field}: {first.get('msg', 'invalid value')}", index=index) from e
    except ValueError as e:
        raise CandleParseError(str(e), index=index) from e

    raise CandleParseError(f"unsupported record type {type(record).__name__}", index=index)


def parse_candles(records: Iterable[Candle | Mapping[str, Any] | Sequence[Any]]) -> list[Candle]:
    """Parse a whole payload, keeping the caller's order."""
    candles = [parse_candle(record, index=i) for i, record in enumerate(records)]
    logger.debug(f"Parsed {len(candles)} candles")
    return candles


def to_ohlcv(candles: Sequence[Candle]) -> OHLCVData:
    """Extract the five parallel price/volume arrays in one pass."""
    data = OHLCVData(opens=[], highs=[], lows=[], closes=[], volumes=[])
    for candle in candles:
        data.opens.append(candle.open)
        data.highs.append(candle.high)
        data.lows.append(candle.low)
        data.closes.append(candle.close)
        data.volumes.append(candle.volume)
    return data
