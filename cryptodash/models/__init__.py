"""Data models for cryptodash."""

from cryptodash.models.candle import Candle, CandleGeometry
from cryptodash.models.indicator import (
    BollingerBands,
    IndicatorPoint,
    MACDResult,
    PriceExtent,
)
from cryptodash.models.pattern import Pattern
from cryptodash.models.alert import AlertEvaluation, AlertEvent, AlertRule
from cryptodash.models.quote import AssetQuote

__all__ = [
    "Candle",
    "CandleGeometry",
    "BollingerBands",
    "IndicatorPoint",
    "MACDResult",
    "PriceExtent",
    "Pattern",
    "AlertEvaluation",
    "AlertEvent",
    "AlertRule",
    "AssetQuote",
]
