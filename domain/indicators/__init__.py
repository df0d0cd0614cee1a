"""Technical indicators library.

Pure Python implementations of common technical indicators over plain
lists of floats. Every function is stateless and never mutates its input.

Indicators:
    - Trend: SMA, EMA, VWAP, ADX (+DI/-DI), Parabolic SAR
    - Momentum: RSI, MACD, Stochastic (%K/%D), Williams %R, CCI, MFI
    - Volatility: Bollinger Bands, ATR
    - Volume: OBV
    - Support/Resistance: Fibonacci retracements, local extrema levels
    - Utils: highest, lowest, true range, typical price

Alignment:
    A windowed indicator with lookback p over n inputs returns n - p + 1
    values; output index i belongs to input index i + p - 1. VWAP, OBV and
    Parabolic SAR return one value per input bar.

Example:
    >>> from domain.indicators import rsi, macd, bollinger_bands
    >>>
    >>> closes = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
    ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
    >>>
    >>> rsi_values = rsi(closes, period=14)
    >>> macd_line, signal_line, histogram = macd(closes, fast=3, slow=6, signal=3)
    >>> upper, middle, lower = bollinger_bands(closes, period=10)
"""

from domain.indicators.adx import adx
from domain.indicators.atr import atr
from domain.indicators.base import (
    ADXResult,
    BollingerBands,
    FibonacciLevels,
    InsufficientData,
    MACDResult,
    OHLCVData,
    PriceLevel,
    StochasticResult,
    SupportResistance,
)
from domain.indicators.bollinger import bollinger_bands
from domain.indicators.levels import fibonacci_levels, support_resistance
from domain.indicators.macd import macd
from domain.indicators.momentum import cci, mfi, williams_r
from domain.indicators.moving_averages import EmaSeed, ema, sma
from domain.indicators.obv import obv
from domain.indicators.parabolic_sar import parabolic_sar
from domain.indicators.rsi import rsi
from domain.indicators.stochastic import stochastic
from domain.indicators.utils import highest, lowest, true_ranges, typical_prices
from domain.indicators.vwap import vwap

__all__ = [
    # Base types
    "OHLCVData",
    "InsufficientData",
    "MACDResult",
    "BollingerBands",
    "ADXResult",
    "StochasticResult",
    "SupportResistance",
    "PriceLevel",
    "FibonacciLevels",
    # Trend indicators
    "sma",
    "ema",
    "EmaSeed",
    "vwap",
    "adx",
    "parabolic_sar",
    # Momentum
    "rsi",
    "macd",
    "stochastic",
    "williams_r",
    "cci",
    "mfi",
    # Volatility
    "bollinger_bands",
    "atr",
    # Volume
    "obv",
    # Support / resistance
    "fibonacci_levels",
    "support_resistance",
    # Utilities
    "highest",
    "lowest",
    "true_ranges",
    "typical_prices",
]
