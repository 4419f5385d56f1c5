"""Candle geometry for chart rendering."""

from typing import Sequence

from cryptodash.indicators.technical import normalize
from cryptodash.models import Candle, CandleGeometry

BODY_WIDTH_RATIO = 0.6


def build_candle_geometry(candles: Sequence[Candle]) -> list[CandleGeometry]:
    """Build per-candle body and wick coordinates.

    Vertical values come from the window's price extent (top-anchored).
    Horizontal centers are spread evenly across the chart; a single
    candle sits in the middle.

    Args:
        candles: Window of candles, oldest first.

    Returns:
        One CandleGeometry per candle, empty for an empty window.
    """
    if not candles:
        return []

    extent = normalize(candles)
    count = len(candles)
    width = 100 / count * BODY_WIDTH_RATIO
    result = []

    for i, candle in enumerate(candles):
        body_top = max(candle.open, candle.close)
        body_bottom = min(candle.open, candle.close)

        if extent.is_flat:
            body_height = 0.0
        else:
            body_height = abs(candle.close - candle.open) / extent.range * 100

        x = (i / (count - 1)) * 100 if count > 1 else 50.0

        result.append(CandleGeometry(
            time=candle.time,
            body_top=extent.position(body_top),
            body_bottom=extent.position(body_bottom),
            body_height=body_height,
            wick_top=extent.position(candle.high),
            wick_bottom=extent.position(candle.low),
            is_bullish=candle.is_bullish,
            x=x,
            width=width,
        ))

    return result
