"""Tests for the JSON response layer."""

import json
from datetime import datetime, timedelta

import pytest

from domain import Candle, Indicator, IndicatorParameters, compute_indicators
from orchestration.technical_analysis import TechnicalReport
from presentation import indicator_to_response, to_api_response, to_json


def make_candles(n: int) -> list[Candle]:
    start = datetime(2024, 1, 1)
    return [
        Candle(
            open=20.0 + i,
            high=21.0 + i + (i % 2),
            low=19.0 + i - (i % 3),
            close=20.0 + i + (1 if i % 4 == 0 else -1),
            volume=100.0 * (i + 1),
            timestamp=start + timedelta(days=i),
        )
        for i in range(n)
    ]


@pytest.fixture
def candles() -> list[Candle]:
    return make_candles(45)


@pytest.fixture
def report(candles) -> TechnicalReport:
    parameters = IndicatorParameters()
    return TechnicalReport(
        symbol="MSFT",
        interval="1d",
        start=datetime(2024, 1, 1),
        end=datetime(2024, 2, 15),
        source="fake",
        candles=candles,
        indicators=compute_indicators(candles, ["RSI", "MACD", "ADX", "SR", "FIB", "OBV"], parameters),
        parameters=parameters,
    )


class TestIndicatorToResponse:
    """Tests for indicator_to_response."""

    def test_flat_series_carries_offset(self, candles):
        results = compute_indicators(candles, ["RSI"])
        response = indicator_to_response(Indicator.RSI, results[Indicator.RSI], candles)

        assert response.status == "ok"
        (series,) = response.series
        assert series.name == "rsi"
        assert series.offset == 14
        assert series.timestamps[0] == candles[14].timestamp
        assert series.timestamps[-1] == candles[-1].timestamp

    def test_named_series(self, candles):
        results = compute_indicators(candles, ["ADX"])
        response = indicator_to_response(Indicator.ADX, results[Indicator.ADX], candles)

        by_name = {s.name: s for s in response.series}
        assert set(by_name) == {"adx", "plus_di", "minus_di"}
        assert by_name["adx"].offset == 27
        assert by_name["plus_di"].offset == 14
        assert len(by_name["adx"].values) == len(by_name["adx"].timestamps)

    def test_insufficient_data(self):
        short = make_candles(5)
        results = compute_indicators(short, ["MACD"])
        response = indicator_to_response(Indicator.MACD, results[Indicator.MACD], short)

        assert response.status == "insufficient_data"
        assert response.required_bars == 34
        assert response.available_bars == 5
        assert response.series == []

    def test_custom_parameters_shift_offset(self, candles):
        parameters = IndicatorParameters(rsi_period=5)
        results = compute_indicators(candles, ["RSI"], parameters)
        response = indicator_to_response(Indicator.RSI, results[Indicator.RSI], candles, parameters)

        assert response.series[0].offset == 5


class TestToJson:
    """Tests for to_api_response / to_json."""

    def test_report_shape(self, report):
        response = to_api_response(report)

        assert response.symbol == "MSFT"
        assert len(response.candles) == 45
        assert [i.indicator for i in response.indicators] == [
            "rsi", "macd", "adx", "support_resistance", "fibonacci", "obv",
        ]
        assert response.parameters["rsi_period"] == 14

    def test_levels(self, report):
        response = to_api_response(report)
        fib = next(i for i in response.indicators if i.indicator == "fibonacci")

        assert fib.levels["level_0"] == max(c.high for c in report.candles)
        assert fib.series == []

    def test_serialisable(self, report):
        data = to_json(report)

        text = json.dumps(data)
        assert '"symbol": "MSFT"' in text
        assert data["parameters"]["ema_seed"] == "first_value"
        assert isinstance(data["candles"][0]["timestamp"], str)
