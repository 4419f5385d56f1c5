"""Technical analysis engine."""

from cryptodash.indicators.technical import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    classify_macd,
    classify_rsi,
    normalize,
    price_position,
)
from cryptodash.indicators.patterns import (
    PATTERN_RULES,
    PatternRule,
    detect_candlestick_patterns,
)
from cryptodash.indicators.geometry import build_candle_geometry

__all__ = [
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "classify_macd",
    "classify_rsi",
    "normalize",
    "price_position",
    "PATTERN_RULES",
    "PatternRule",
    "detect_candlestick_patterns",
    "build_candle_geometry",
]
