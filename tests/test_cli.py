"""
Tests for the command line interface.

The Yahoo source is replaced with an in-memory one so no network is used.
"""

import argparse
import json
from datetime import datetime, timedelta

import pytest

import cli
from config import reload_config
from domain import Candle
from ports import FetchError


class StubSource:
    source_name = "stub"

    def __init__(self, *args, **kwargs):
        pass

    def fetch_candles(self, symbol, interval, start, end):
        if symbol == "DOWN":
            raise FetchError(self.source_name, "unreachable")
        base = datetime(2024, 1, 1)
        return [
            Candle(
                open=30.0 + i,
                high=31.0 + i,
                low=29.0 + i - (i % 2),
                close=30.5 + i - (1 if i % 3 == 0 else 0),
                volume=1000.0,
                timestamp=base + timedelta(days=i),
            )
            for i in range(60)
        ]


@pytest.fixture(autouse=True)
def stub_environment(tmp_path, monkeypatch):
    """Empty working directory, fresh config and no network."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "YahooCandleSource", StubSource)
    reload_config()
    yield
    reload_config()


class TestParseOverrides:
    """Tests for _parse_overrides."""

    def test_typed_values(self):
        overrides = cli._parse_overrides(["rsi_period=21", "bollinger_std_dev=2.5", "ema_seed=sma"])
        assert overrides == {"rsi_period": 21, "bollinger_std_dev": 2.5, "ema_seed": "sma"}

    def test_none(self):
        assert cli._parse_overrides(None) == {}

    def test_malformed(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_overrides(["rsi_period"])


class TestCommands:
    """Tests for the CLI commands."""

    def test_indicators(self, capsys):
        assert cli.main(["indicators"]) == 0

        out = capsys.readouterr().out
        assert "RSI" in out
        assert "min bars: 15" in out

    def test_analyze_summary(self, capsys):
        assert cli.main(["analyze", "AAPL", "-i", "RSI,FIB,SR"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("AAPL (1d, 60 candles, source=stub)")
        assert "rsi: rsi=" in out
        assert "fibonacci: 0=" in out
        assert "support_resistance: support [" in out

    def test_analyze_json(self, tmp_path, capsys):
        output = tmp_path / "out.json"
        assert cli.main(["analyze", "AAPL", "-f", "json", "-o", str(output), "-p", "rsi_period=5"]) == 0

        data = json.loads(output.read_text())
        assert data["AAPL"]["parameters"]["rsi_period"] == 5
        assert [i["indicator"] for i in data["AAPL"]["indicators"]] == ["rsi", "macd", "bollinger_bands"]

    def test_partial_failure(self, capsys):
        assert cli.main(["analyze", "AAPL", "DOWN"]) == 1

        captured = capsys.readouterr()
        assert "AAPL" in captured.out
        assert "Error fetching DOWN" in captured.err

    def test_unknown_indicator(self, capsys):
        assert cli.main(["analyze", "AAPL", "-i", "NOPE"]) == 2
        assert "Unknown indicator" in capsys.readouterr().err

    def test_unknown_parameter(self, capsys):
        assert cli.main(["analyze", "AAPL", "-p", "rsi_length=5"]) == 2

    def test_invalid_parameter_value(self, capsys):
        assert cli.main(["analyze", "AAPL", "-i", "EMA", "-p", "ema_seed=foo"]) == 2
        assert "ema_seed" in capsys.readouterr().err

    def test_macd_periods_crossed(self, capsys):
        assert cli.main(["analyze", "AAPL", "-i", "MACD", "-p", "macd_fast=30"]) == 2
        assert "macd_slow" in capsys.readouterr().err

    def test_json_partial_failure(self, tmp_path, capsys):
        output = tmp_path / "out.json"
        assert cli.main(["analyze", "AAPL", "DOWN", "-f", "json", "-o", str(output)]) == 1

        data = json.loads(output.read_text())
        assert list(data) == ["AAPL", "DOWN"]
        assert data["AAPL"]["symbol"] == "AAPL"
        error = data["DOWN"]["error"]
        assert error["code"] == "E102"
        assert error["source"] == "stub"
        assert error["message"] == "unreachable"
