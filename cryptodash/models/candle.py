"""Candle (OHLCV) data model."""

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """Represents a single OHLCV candle.

    ``time`` is an opaque, order-preserving label (e.g. "00:00" or an ISO
    timestamp). A window of candles is always oldest first.
    """

    time: str = Field(..., description="Candle time label")
    open: float = Field(..., ge=0, description="Opening price")
    high: float = Field(..., ge=0, description="High price")
    low: float = Field(..., ge=0, description="Low price")
    close: float = Field(..., ge=0, description="Closing price")
    volume: float = Field(default=0.0, ge=0, description="Traded quantity")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def is_bullish(self) -> bool:
        """True when the candle closed at or above its open."""
        return self.close >= self.open


class CandleGeometry(BaseModel):
    """Render coordinates for one candle, in percent of the chart box.

    Vertical values are top-anchored: 0 is the highest price in the window.
    """

    time: str = Field(..., description="Source candle time label")
    body_top: float = Field(..., description="Top edge of the body")
    body_bottom: float = Field(..., description="Bottom edge of the body")
    body_height: float = Field(..., ge=0, description="Body height")
    wick_top: float = Field(..., description="Position of the high")
    wick_bottom: float = Field(..., description="Position of the low")
    is_bullish: bool = Field(..., description="close >= open")
    x: float = Field(..., description="Horizontal center of the candle")
    width: float = Field(..., ge=0, description="Body width")

    model_config = {"frozen": True, "allow_inf_nan": False}
