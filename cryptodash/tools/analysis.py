"""Window analysis tool for the chart panel.

Bundles every indicator the candlestick chart shows into one dictionary:
the standard overlays, oscillators with their classifications, detected
patterns and a trade recommendation.
"""

from typing import Optional, Sequence

from cryptodash.indicators import (
    build_candle_geometry,
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    classify_macd,
    classify_rsi,
    detect_candlestick_patterns,
    normalize,
)
from cryptodash.indicators.technical import RSI_OVERBOUGHT, RSI_OVERSOLD
from cryptodash.models import Candle, Pattern

# Overlays drawn on the chart
SMA_PERIODS = (20, 50)
EMA_PERIODS = (12, 26)


def recommend_trade(rsi: float, patterns: Sequence[Pattern]) -> Optional[dict]:
    """Derive a scalping recommendation from RSI and detected patterns.

    Args:
        rsi: Latest RSI value.
        patterns: Patterns detected on the same window.

    Returns:
        Dictionary with signal, reason and color, or None when the
        indicators disagree.
    """
    if rsi < RSI_OVERSOLD and any(p.polarity == "bullish" for p in patterns):
        return {
            "signal": "LONG",
            "reason": "RSI is oversold and a bullish pattern was detected",
            "color": "green",
        }

    if rsi > RSI_OVERBOUGHT and any(p.polarity == "bearish" for p in patterns):
        return {
            "signal": "SHORT",
            "reason": "RSI is overbought and a bearish pattern was detected",
            "color": "red",
        }

    if not patterns and RSI_OVERSOLD <= rsi <= RSI_OVERBOUGHT:
        return {
            "signal": "WAIT",
            "reason": "No clear entry signal, wait for a pattern",
            "color": "dim",
        }

    return None


def analyze_window(
    candles: Sequence[Candle],
    asset_name: Optional[str] = None,
    include_geometry: bool = False,
) -> dict:
    """Calculate the full indicator set for a candle window.

    Args:
        candles: Window of candles, oldest first.
        asset_name: Optional display name of the asset.
        include_geometry: Also return per-candle render coordinates.

    Returns:
        Dictionary containing:
        - asset: The asset name (or None)
        - data_points: Number of candles analyzed
        - extent: Price extent of the window
        - overlays: SMA/EMA series keyed by name (e.g. "sma_20")
        - bollinger: Bollinger bands and whether they are active
        - rsi: Latest RSI value and its classification
        - macd: Simplified MACD and its classification
        - patterns: Detected candlestick patterns
        - recommendation: Trade recommendation (or None)
        - last_candle: The most recent candle
        - error: Error message if analysis failed (None if successful)
    """
    if not candles:
        return {
            "asset": asset_name,
            "data_points": 0,
            "error": "No candles to analyze",
        }

    overlays = {}
    for period in SMA_PERIODS:
        overlays[f"sma_{period}"] = [p.model_dump() for p in calculate_sma(candles, period)]
    for period in EMA_PERIODS:
        overlays[f"ema_{period}"] = [p.model_dump() for p in calculate_ema(candles, period)]

    bands = calculate_bollinger_bands(candles)
    rsi = calculate_rsi(candles)
    macd = calculate_macd(candles)
    patterns = detect_candlestick_patterns(candles)

    result = {
        "asset": asset_name,
        "data_points": len(candles),
        "extent": normalize(candles).model_dump(),
        "overlays": overlays,
        "bollinger": {
            **bands.model_dump(),
            "active": bands.is_active,
        },
        "rsi": {
            "value": rsi,
            "signal": classify_rsi(rsi),
        },
        "macd": {
            **macd.model_dump(),
            "trend": classify_macd(macd),
        },
        "patterns": [p.model_dump() for p in patterns],
        "recommendation": recommend_trade(rsi, patterns),
        "last_candle": candles[-1].model_dump(),
        "error": None,
    }

    if include_geometry:
        result["geometry"] = [g.model_dump() for g in build_candle_geometry(candles)]

    return result
