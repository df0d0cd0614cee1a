from .json_api import (
    CandleResponse,
    SeriesResponse,
    LevelResponse,
    IndicatorResponse,
    TechnicalReportResponse,
    indicator_to_response,
    to_api_response,
    to_json,
)

__all__ = [
    "CandleResponse",
    "SeriesResponse",
    "LevelResponse",
    "IndicatorResponse",
    "TechnicalReportResponse",
    "indicator_to_response",
    "to_api_response",
    "to_json",
]
