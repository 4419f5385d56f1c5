"""Indicator result data models."""

from pydantic import BaseModel, Field


# Mid-scale position used when a window has no price range
FLAT_POSITION = 50.0


class PriceExtent(BaseModel):
    """Global price extent of a window across open/high/low/close."""

    min: float = Field(..., description="Lowest price in the window")
    max: float = Field(..., description="Highest price in the window")

    model_config = {"frozen": True}

    @property
    def range(self) -> float:
        """Distance between the highest and lowest price."""
        return self.max - self.min

    @property
    def is_flat(self) -> bool:
        """True when every price in the window is identical."""
        return self.range == 0

    def position(self, price: float) -> float:
        """Map a price to a top-anchored vertical position in [0, 100].

        Higher prices map to smaller values. A flat window has no scale,
        so every price sits at mid-scale.
        """
        if self.is_flat:
            return FLAT_POSITION
        return ((self.max - price) / self.range) * 100


class IndicatorPoint(BaseModel):
    """One sample of a derived series, anchored to a source candle."""

    time: str = Field(..., description="Time label of the source candle")
    value: float = Field(..., description="Indicator value (price units)")
    position: float = Field(..., description="Vertical chart position")

    model_config = {"frozen": True}


class BollingerBands(BaseModel):
    """Index-aligned upper/middle/lower Bollinger series."""

    upper: list[IndicatorPoint] = Field(default_factory=list)
    middle: list[IndicatorPoint] = Field(default_factory=list)
    lower: list[IndicatorPoint] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_active(self) -> bool:
        """True when the window was long enough to produce bands."""
        return len(self.upper) > 0


class MACDResult(BaseModel):
    """Simplified MACD: EMA12 - EMA26 with a constant zero signal line."""

    macd: float = Field(default=0.0, description="EMA(12) - EMA(26)")
    signal: float = Field(default=0.0, description="Signal line (always 0)")
    histogram: float = Field(default=0.0, description="Equal to macd")

    model_config = {"frozen": True}
