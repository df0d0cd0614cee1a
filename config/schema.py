"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from domain import DEFAULT_INDICATORS, EmaSeed, Indicator, IndicatorParameters, UnknownIndicatorError


class IndicatorsConfig(BaseModel):
    """Default indicator parameters."""

    # Trend
    sma_period: int = Field(default=20, ge=1, le=500)
    ema_period: int = Field(default=20, ge=1, le=500)
    adx_period: int = Field(default=14, ge=1, le=200)
    sar_acceleration: float = Field(default=0.02, gt=0.0, le=1.0)
    sar_maximum: float = Field(default=0.2, gt=0.0, le=1.0)

    # Momentum
    rsi_period: int = Field(default=14, ge=1, le=200)
    macd_fast: int = Field(default=12, ge=1, le=200)
    macd_slow: int = Field(default=26, ge=2, le=400)
    macd_signal: int = Field(default=9, ge=1, le=200)
    stochastic_k: int = Field(default=14, ge=1, le=200)
    stochastic_d: int = Field(default=3, ge=1, le=50)
    williams_r_period: int = Field(default=14, ge=1, le=200)
    cci_period: int = Field(default=20, ge=1, le=200)
    mfi_period: int = Field(default=14, ge=1, le=200)

    # Volatility
    bollinger_period: int = Field(default=20, ge=1, le=500)
    bollinger_std_dev: float = Field(default=2.0, ge=0.0, le=10.0)
    atr_period: int = Field(default=14, ge=1, le=200)

    # Support / resistance
    support_resistance_period: int = Field(default=20, ge=1, le=200)

    ema_seed: EmaSeed = Field(
        default=EmaSeed.FIRST_VALUE,
        description="first_value keeps the historical output, sma uses the textbook seed",
    )

    @field_validator("macd_slow")
    @classmethod
    def slow_gt_fast(cls, v: int, info) -> int:
        fast = info.data.get("macd_fast", 12)
        if v <= fast:
            raise ValueError("macd_slow must be greater than macd_fast")
        return v

    @model_validator(mode="after")
    def acceleration_within_maximum(self) -> "IndicatorsConfig":
        if self.sar_acceleration > self.sar_maximum:
            raise ValueError("sar_acceleration must not exceed sar_maximum")
        return self

    def to_parameters(self) -> IndicatorParameters:
        """Convert to the parameter object the engine takes."""
        return IndicatorParameters(**self.model_dump())


class DataSourceConfig(BaseModel):
    """Candle source configuration."""

    default_interval: str = Field(default="1d", min_length=1)
    lookback_days: int = Field(default=50, ge=1, le=3650, description="History fetched when no start date is given")
    auto_adjust: bool = Field(default=True, description="Use split/dividend adjusted prices")


class EngineConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    # Indicators computed when a request names none
    default_indicators: list[str] = Field(
        default_factory=lambda: [i.name for i in DEFAULT_INDICATORS]
    )

    # Subsections
    indicators: IndicatorsConfig = Field(default_factory=IndicatorsConfig)
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)

    @field_validator("default_indicators")
    @classmethod
    def validate_indicator_names(cls, v: list[str]) -> list[str]:
        """Reject names the engine cannot dispatch."""
        validated = []
        for name in v:
            try:
                validated.append(Indicator.parse(name).name)
            except UnknownIndicatorError as e:
                raise ValueError(str(e)) from e
        if not validated:
            raise ValueError("default_indicators must not be empty")
        return validated
