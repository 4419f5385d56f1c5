"""Candlestick pattern data model."""

from typing import Literal

from pydantic import BaseModel, Field

Polarity = Literal["bullish", "bearish", "neutral"]


class Pattern(BaseModel):
    """A named candlestick configuration found in a window."""

    name: str = Field(..., min_length=1, description="Pattern name")
    polarity: Polarity = Field(..., description="Directional bias")
    confidence: int = Field(..., ge=0, le=100, description="Fixed confidence score")
    description: str = Field(default="", description="Short trading note")

    model_config = {"frozen": True}
