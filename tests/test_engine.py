"""
Tests for the indicator orchestrator.

Tests cover:
- Name resolution and aliases
- Dispatch of every indicator kind
- InsufficientData markers
- Output alignment offsets
- Raw record parsing
"""

import logging

import pytest

from domain import (
    Candle,
    DEFAULT_INDICATORS,
    EmaSeed,
    EmptyCandlesError,
    Indicator,
    IndicatorParameters,
    InsufficientData,
    InvalidParameterError,
    UnknownIndicatorError,
    compute_indicator,
    compute_indicators,
    required_bars,
    resolve_indicators,
    series_offsets,
)
from domain.indicators import (
    ADXResult,
    BollingerBands,
    FibonacciLevels,
    MACDResult,
    StochasticResult,
    SupportResistance,
    rsi,
    sma,
)


def make_candles(n: int) -> list[Candle]:
    """Zig-zag uptrend so every oscillator has both up and down bars."""
    candles = []
    for i in range(n):
        close = 100.0 + i + (1.5 if i % 3 == 0 else -0.5)
        candles.append(Candle(
            open=close - 0.3,
            high=close + 1.0,
            low=close - 1.2,
            close=close,
            volume=1000.0 + 25 * i,
        ))
    return candles


@pytest.fixture
def candles() -> list[Candle]:
    return make_candles(80)


class TestIndicatorParse:
    """Tests for Indicator.parse."""

    @pytest.mark.parametrize("name,expected", [
        ("RSI", Indicator.RSI),
        ("rsi", Indicator.RSI),
        ("Bollinger_Bands", Indicator.BOLLINGER_BANDS),
        ("bollinger", Indicator.BOLLINGER_BANDS),
        ("BBANDS", Indicator.BOLLINGER_BANDS),
        ("parabolic-sar", Indicator.PARABOLIC_SAR),
        ("SAR", Indicator.PARABOLIC_SAR),
        ("williams", Indicator.WILLIAMS_R),
        ("stoch", Indicator.STOCHASTIC),
        ("support resistance", Indicator.SUPPORT_RESISTANCE),
        (" fib ", Indicator.FIBONACCI),
        (Indicator.ATR, Indicator.ATR),
    ])
    def test_parse(self, name, expected):
        assert Indicator.parse(name) is expected

    def test_unknown_name(self):
        with pytest.raises(UnknownIndicatorError) as exc_info:
            Indicator.parse("ICHIMOKU")

        assert exc_info.value.name == "ICHIMOKU"
        assert "RSI" in exc_info.value.known
        assert isinstance(exc_info.value, ValueError)


class TestResolveIndicators:
    """Tests for resolve_indicators."""

    def test_none_gives_defaults(self):
        assert resolve_indicators(None) == list(DEFAULT_INDICATORS)

    def test_single_string(self):
        assert resolve_indicators("atr") == [Indicator.ATR]

    def test_duplicates_dropped_in_order(self):
        assert resolve_indicators(["MACD", "rsi", "macd", "RSI"]) == [Indicator.MACD, Indicator.RSI]


class TestComputeIndicators:
    """Tests for compute_indicators."""

    def test_defaults(self, candles):
        results = compute_indicators(candles)

        assert list(results) == [Indicator.RSI, Indicator.MACD, Indicator.BOLLINGER_BANDS]
        assert isinstance(results[Indicator.MACD], MACDResult)
        assert isinstance(results[Indicator.BOLLINGER_BANDS], BollingerBands)

    def test_every_indicator_dispatches(self, candles):
        results = compute_indicators(candles, list(Indicator))

        assert list(results) == list(Indicator)
        assert not any(isinstance(r, InsufficientData) for r in results.values())
        assert isinstance(results[Indicator.ADX], ADXResult)
        assert isinstance(results[Indicator.STOCHASTIC], StochasticResult)
        assert isinstance(results[Indicator.SUPPORT_RESISTANCE], SupportResistance)
        assert isinstance(results[Indicator.FIBONACCI], FibonacciLevels)

    def test_matches_direct_call(self, candles):
        closes = [c.close for c in candles]
        results = compute_indicators(candles, ["SMA", "RSI"])

        assert results[Indicator.SMA] == sma(closes, 20)
        assert results[Indicator.RSI] == rsi(closes, 14)

    def test_short_key_records_sma(self):
        prices = [100, 102, 101, 103, 105, 104, 106, 108, 107, 109,
                  111, 110, 112, 114, 113, 115, 117, 116, 118, 120]
        records = [{"o": p, "h": p + 1, "l": p - 1, "c": p, "v": 100} for p in prices]

        result = compute_indicator(records, "SMA", IndicatorParameters(sma_period=5))
        assert result[0] == pytest.approx(102.2)

    def test_fibonacci_spans_full_range(self, candles):
        levels = compute_indicator(candles, "FIB")

        assert levels.level_0 == max(c.high for c in candles)
        assert levels.level_100 == min(c.low for c in candles)

    def test_empty_candles(self):
        with pytest.raises(EmptyCandlesError):
            compute_indicators([], ["RSI"])

    def test_generator_input(self):
        results = compute_indicators((c for c in make_candles(30)), ["VWAP", "OBV"])

        assert len(results[Indicator.VWAP]) == 30
        assert len(results[Indicator.OBV]) == 30

    def test_empty_generator(self):
        with pytest.raises(EmptyCandlesError):
            compute_indicators(iter([]), ["RSI"])

    def test_unknown_name_computes_nothing(self, candles):
        with pytest.raises(UnknownIndicatorError):
            compute_indicators(candles, ["RSI", "NOPE"])

    def test_insufficient_data_marker(self, caplog):
        short = make_candles(10)

        with caplog.at_level(logging.WARNING, logger="domain.engine"):
            results = compute_indicators(short, ["RSI", "SMA", "OBV"])

        marker = results[Indicator.RSI]
        assert isinstance(marker, InsufficientData)
        assert marker.required == 15
        assert marker.available == 10
        assert isinstance(results[Indicator.SMA], InsufficientData)
        # OBV only needs two bars
        assert len(results[Indicator.OBV]) == 10
        assert "Insufficient data for rsi" in caplog.text

    def test_single_candle(self):
        results = compute_indicators(make_candles(1), ["OBV", "SAR", "VWAP", "FIB"])

        assert isinstance(results[Indicator.OBV], InsufficientData)
        assert isinstance(results[Indicator.PARABOLIC_SAR], InsufficientData)
        assert len(results[Indicator.VWAP]) == 1
        assert isinstance(results[Indicator.FIBONACCI], FibonacciLevels)

    def test_parameters_respected(self, candles):
        params = IndicatorParameters().with_overrides(rsi_period=5, macd_fast=3, macd_slow=6, macd_signal=3)
        results = compute_indicators(candles, ["RSI", "MACD"], params)

        assert len(results[Indicator.RSI]) == len(candles) - 5
        assert len(results[Indicator.MACD].macd_line) == len(candles) - 6 - 3 + 2

    def test_ema_seed_parameter(self, candles):
        first = compute_indicator(candles, "EMA")
        seeded = compute_indicator(candles, "EMA", IndicatorParameters(ema_seed=EmaSeed.SMA))

        assert seeded[0] == pytest.approx(sum(c.close for c in candles[:20]) / 20)
        assert first[0] != seeded[0]

    def test_raw_rows_parsed(self):
        rows = [
            ["2024-01-02T00:00:00+0000", "10", "11", "9", "10.5", "100"],
            ["2024-01-03T00:00:00+0000", "10.5", "12", "10", "11.5", "150"],
            ["2024-01-04T00:00:00+0000", "11.5", "12", "10", "10.0", "120"],
        ]
        result = compute_indicator(rows, "OBV")
        assert result == [100.0, 250.0, 130.0]


class TestIndicatorParameters:
    """Tests for IndicatorParameters validation."""

    def test_ema_seed_string_normalised(self):
        assert IndicatorParameters(ema_seed="sma").ema_seed is EmaSeed.SMA

    def test_unknown_ema_seed(self):
        with pytest.raises(InvalidParameterError, match="ema_seed"):
            IndicatorParameters(ema_seed="foo")

    @pytest.mark.parametrize("overrides", [
        {"rsi_period": 0},
        {"atr_period": -3},
        {"sma_period": 2.5},
        {"macd_fast": 26},
        {"macd_fast": 30, "macd_slow": 10},
        {"sar_acceleration": 0.0},
        {"sar_acceleration": 0.5},
        {"bollinger_std_dev": -1.0},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(InvalidParameterError):
            IndicatorParameters().with_overrides(**overrides)

    def test_unknown_override(self):
        with pytest.raises(InvalidParameterError, match="rsi_length"):
            IndicatorParameters().with_overrides(rsi_length=5)

    def test_overrides_keep_other_fields(self):
        params = IndicatorParameters(atr_period=7).with_overrides(rsi_period=21)

        assert params.rsi_period == 21
        assert params.atr_period == 7


class TestAlignment:
    """Every series ends on the last candle once offsets are applied."""

    @pytest.mark.parametrize("indicator", [
        i for i in Indicator if i not in (Indicator.SUPPORT_RESISTANCE, Indicator.FIBONACCI)
    ])
    def test_offsets_reach_last_candle(self, candles, indicator):
        result = compute_indicator(candles, indicator)
        offsets = series_offsets(indicator)

        for name, offset in offsets.items():
            values = result if name == "values" else getattr(result, name)
            assert offset + len(values) == len(candles), name

    @pytest.mark.parametrize("indicator", list(Indicator))
    def test_required_bars_is_enough(self, indicator):
        n = required_bars(indicator)
        result = compute_indicator(make_candles(n), indicator)
        assert not isinstance(result, InsufficientData)

    def test_level_indicators_have_no_series(self):
        assert series_offsets(Indicator.SUPPORT_RESISTANCE) == {}
        assert series_offsets(Indicator.FIBONACCI) == {}

    def test_adx_offsets(self):
        offsets = series_offsets(Indicator.ADX, IndicatorParameters(adx_period=10))
        assert offsets == {"adx": 19, "plus_di": 10, "minus_di": 10}
