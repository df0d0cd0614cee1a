"""
Tests for configuration loading and validation.

Tests cover:
- Schema defaults and bounds
- Cross-field validation (MACD periods, SAR factors)
- TOML file loading
- Environment overrides
"""

import pytest
from pydantic import ValidationError

from config import ConfigError, EngineConfig, IndicatorsConfig, load_config
from config.loader import ENV_PREFIX
from domain import EmaSeed, IndicatorParameters


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test in an empty directory with no TURTLESTACK_* variables."""
    monkeypatch.chdir(tmp_path)
    names = ["INDICATORS", "INTERVAL", "LOOKBACK_DAYS"] + [n.upper() for n in IndicatorsConfig.model_fields]
    for name in names:
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)
    return tmp_path


class TestSchema:
    """Tests for the config models."""

    def test_defaults_match_engine(self):
        config = EngineConfig()

        assert config.default_indicators == ["RSI", "MACD", "BOLLINGER_BANDS"]
        assert config.indicators.to_parameters() == IndicatorParameters()
        assert config.data_source.default_interval == "1d"
        assert config.data_source.lookback_days == 50

    def test_indicator_names_normalised(self):
        config = EngineConfig(default_indicators=["rsi", "bollinger", "sar"])
        assert config.default_indicators == ["RSI", "BOLLINGER_BANDS", "PARABOLIC_SAR"]

    def test_unknown_indicator_rejected(self):
        with pytest.raises(ValidationError, match="Unknown indicator"):
            EngineConfig(default_indicators=["RSI", "MAGIC"])

    def test_empty_indicator_list_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(default_indicators=[])

    def test_period_bounds(self):
        with pytest.raises(ValidationError):
            IndicatorsConfig(rsi_period=0)

    def test_macd_slow_must_exceed_fast(self):
        with pytest.raises(ValidationError, match="macd_slow"):
            IndicatorsConfig(macd_fast=20, macd_slow=10)

    def test_sar_acceleration_within_maximum(self):
        with pytest.raises(ValidationError, match="sar_acceleration"):
            IndicatorsConfig(sar_acceleration=0.3, sar_maximum=0.2)

    def test_ema_seed_from_string(self):
        config = IndicatorsConfig(ema_seed="sma")
        assert config.to_parameters().ema_seed is EmaSeed.SMA


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file_gives_defaults(self):
        assert load_config() == EngineConfig()

    def test_toml_file(self, isolated_env):
        (isolated_env / "turtlestack.toml").write_text(
            'default_indicators = ["ATR", "OBV"]\n'
            "\n"
            "[indicators]\n"
            "rsi_period = 21\n"
            'ema_seed = "sma"\n'
            "\n"
            "[data_source]\n"
            'default_interval = "1h"\n'
        )
        config = load_config()

        assert config.default_indicators == ["ATR", "OBV"]
        assert config.indicators.rsi_period == 21
        assert config.indicators.ema_seed is EmaSeed.SMA
        assert config.data_source.default_interval == "1h"
        # Untouched sections keep defaults
        assert config.indicators.macd_slow == 26

    def test_explicit_path(self, isolated_env):
        path = isolated_env / "custom.toml"
        path.write_text("[indicators]\natr_period = 7\n")

        assert load_config(path).indicators.atr_period == 7

    def test_explicit_path_missing(self, isolated_env):
        with pytest.raises(ConfigError, match="not found"):
            load_config(isolated_env / "missing.toml")

    def test_malformed_toml(self, isolated_env):
        path = isolated_env / "bad.toml"
        path.write_text("[indicators\nrsi_period = ")

        with pytest.raises(ConfigError, match="Failed to parse TOML"):
            load_config(path)

    def test_invalid_value_names_field(self, isolated_env):
        path = isolated_env / "bad.toml"
        path.write_text("[indicators]\nrsi_period = -3\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "indicators.rsi_period"

    def test_env_overrides_file(self, isolated_env, monkeypatch):
        (isolated_env / "turtlestack.toml").write_text(
            'default_indicators = ["ATR"]\n[data_source]\nlookback_days = 10\n'
        )
        monkeypatch.setenv(f"{ENV_PREFIX}INDICATORS", "rsi, macd")
        monkeypatch.setenv(f"{ENV_PREFIX}LOOKBACK_DAYS", "90")
        monkeypatch.setenv(f"{ENV_PREFIX}EMA_SEED", "SMA")

        config = load_config()

        assert config.default_indicators == ["RSI", "MACD"]
        assert config.data_source.lookback_days == 90
        assert config.indicators.ema_seed is EmaSeed.SMA

    def test_env_indicator_parameters(self, monkeypatch):
        monkeypatch.setenv(f"{ENV_PREFIX}RSI_PERIOD", "21")
        monkeypatch.setenv(f"{ENV_PREFIX}BOLLINGER_STD_DEV", "2.5")

        params = load_config().indicators.to_parameters()

        assert params.rsi_period == 21
        assert params.bollinger_std_dev == 2.5

    def test_env_cross_field_validation(self, monkeypatch):
        monkeypatch.setenv(f"{ENV_PREFIX}MACD_FAST", "30")

        with pytest.raises(ConfigError, match="macd_slow"):
            load_config()

    def test_env_invalid_value(self, monkeypatch):
        monkeypatch.setenv(f"{ENV_PREFIX}INTERVAL", "")
        monkeypatch.setenv(f"{ENV_PREFIX}LOOKBACK_DAYS", "0")

        with pytest.raises(ConfigError) as exc_info:
            load_config()
        assert exc_info.value.field == "data_source.lookback_days"
