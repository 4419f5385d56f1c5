"""Technical indicator calculations for the chart panel.

Every function here is pure: it takes a chronological window of candles
(oldest first), re-scans it in full and returns fresh value objects.
Insufficient data is never an error; each calculator documents the
sentinel it returns instead (empty series, RSI 50, all-zero MACD).
"""

import math
from typing import Literal, Sequence

from cryptodash.models import (
    BollingerBands,
    Candle,
    IndicatorPoint,
    MACDResult,
    PriceExtent,
)

RSI_PERIOD = 14
RSI_NEUTRAL = 50.0
RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

BOLLINGER_PERIOD = 20
BOLLINGER_STD_DEV = 2.0

MACD_FAST = 12
MACD_SLOW = 26


def normalize(candles: Sequence[Candle]) -> PriceExtent:
    """Calculate the global price extent of a window.

    The extent covers all four prices of every candle, not just closes,
    so wicks stay inside the chart box.

    Args:
        candles: Non-empty window of candles.

    Returns:
        PriceExtent with the lowest and highest price.

    Raises:
        ValueError: If the window is empty.
    """
    if not candles:
        raise ValueError("Cannot normalize an empty window")

    prices = [p for c in candles for p in (c.open, c.high, c.low, c.close)]
    return PriceExtent(min=min(prices), max=max(prices))


def price_position(price: float, extent: PriceExtent) -> float:
    """Map a price to a top-anchored vertical position.

    Returns 50.0 for a flat window instead of dividing by zero.
    """
    return extent.position(price)


def _point(candle: Candle, value: float, extent: PriceExtent) -> IndicatorPoint:
    return IndicatorPoint(
        time=candle.time,
        value=value,
        position=extent.position(value),
    )


def calculate_sma(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """Calculate Simple Moving Average of closes.

    Args:
        candles: Window of candles.
        period: Number of closes in each trailing block.

    Returns:
        One point per index from ``period - 1`` to the end, labeled with
        the last candle of each block. Empty when the window is shorter
        than ``period``.
    """
    if period < 1 or len(candles) < period:
        return []

    extent = normalize(candles)
    closes = [c.close for c in candles]
    result = []

    for i in range(period - 1, len(candles)):
        window = closes[i - period + 1:i + 1]
        result.append(_point(candles[i], sum(window) / period, extent))

    return result


def calculate_ema(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """Calculate Exponential Moving Average of closes.

    The first EMA value is the simple average of the first ``period``
    closes. That seed produces no point of its own, so the series is one
    point shorter than the SMA of the same period.

    Args:
        candles: Window of candles.
        period: Number of periods for the EMA.

    Returns:
        ``len(candles) - period`` points, or an empty list when the window
        is shorter than ``period``.
    """
    if period < 1 or len(candles) < period:
        return []

    extent = normalize(candles)
    multiplier = 2 / (period + 1)

    # Seed with SMA of the first window
    ema = sum(c.close for c in candles[:period]) / period

    result = []
    for candle in candles[period:]:
        ema = (candle.close - ema) * multiplier + ema
        result.append(_point(candle, ema, extent))

    return result


def calculate_bollinger_bands(candles: Sequence[Candle]) -> BollingerBands:
    """Calculate Bollinger Bands over a fixed 20-period window.

    Uses the population standard deviation of the same 20 closes as the
    middle band and a 2 sigma envelope.

    Returns:
        BollingerBands with three index-aligned series, all empty when the
        window has fewer than 20 candles.
    """
    period = BOLLINGER_PERIOD
    if len(candles) < period:
        return BollingerBands()

    extent = normalize(candles)
    closes = [c.close for c in candles]
    upper, middle, lower = [], [], []

    for i in range(period - 1, len(candles)):
        window = closes[i - period + 1:i + 1]
        mean = sum(window) / period
        variance = sum((x - mean) ** 2 for x in window) / period
        std = math.sqrt(variance)

        middle.append(_point(candles[i], mean, extent))
        upper.append(_point(candles[i], mean + BOLLINGER_STD_DEV * std, extent))
        lower.append(_point(candles[i], mean - BOLLINGER_STD_DEV * std, extent))

    return BollingerBands(upper=upper, middle=middle, lower=lower)


def calculate_rsi(candles: Sequence[Candle]) -> float:
    """Calculate the latest Relative Strength Index (period 14).

    Averages are plain sums of the last 14 gains/losses divided by 14,
    not Wilder-smoothed. A zero average loss is floored to 1, which
    pushes RSI towards 100 instead of producing infinity.

    Returns:
        RSI in [0, 100], or 50.0 when fewer than 15 candles are given.
    """
    period = RSI_PERIOD
    if len(candles) < period + 1:
        return RSI_NEUTRAL

    closes = [c.close for c in candles[-(period + 1):]]
    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    avg_gain = sum(c for c in changes if c > 0) / period
    avg_loss = abs(sum(c for c in changes if c < 0)) / period

    rs = avg_gain / (avg_loss or 1)
    return 100 - (100 / (1 + rs))


def classify_rsi(value: float) -> Literal["overbought", "oversold", "neutral"]:
    """Classify an RSI value against the 70/30 thresholds."""
    if value > RSI_OVERBOUGHT:
        return "overbought"
    if value < RSI_OVERSOLD:
        return "oversold"
    return "neutral"


def calculate_macd(candles: Sequence[Candle]) -> MACDResult:
    """Calculate the simplified MACD from the last EMA(12) and EMA(26).

    The signal line is not computed: it is the constant 0 and the
    histogram equals the MACD value.

    Returns:
        MACDResult, all zeros when either EMA series is empty.
    """
    fast = calculate_ema(candles, MACD_FAST)
    slow = calculate_ema(candles, MACD_SLOW)

    if not fast or not slow:
        return MACDResult()

    macd_line = fast[-1].value - slow[-1].value
    return MACDResult(macd=macd_line, signal=0.0, histogram=macd_line)


def classify_macd(result: MACDResult) -> Literal["bullish", "bearish"]:
    """Classify a MACD result by the sign of the MACD value."""
    return "bullish" if result.macd > 0 else "bearish"
