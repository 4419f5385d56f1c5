"""AssetQuote data model."""

from pydantic import BaseModel, Field


class AssetQuote(BaseModel):
    """Live market snapshot for one asset card on the dashboard."""

    id: str = Field(..., min_length=1, description="Asset ID")
    name: str = Field(..., min_length=1, description="Asset name")
    symbol: str = Field(..., min_length=1, description="Ticker symbol")
    price: float = Field(..., ge=0, description="Last price")
    change_24h: float = Field(
        default=0.0, alias="change24h", description="24h change in percent"
    )
    volume: float = Field(default=0.0, ge=0, description="24h traded volume")
    market_cap: float = Field(
        default=0.0, ge=0, alias="marketCap", description="Market capitalisation"
    )
    sparkline: list[float] = Field(default_factory=list, description="Recent prices")

    model_config = {"frozen": True, "populate_by_name": True, "allow_inf_nan": False}
