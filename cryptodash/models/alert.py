"""Alert data models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from cryptodash.formatting import format_price

AlertCondition = Literal["above", "below"]


class AlertRule(BaseModel):
    """A one-shot price threshold rule for a single asset."""

    id: int = Field(..., ge=1, description="Rule ID")
    asset_id: str = Field(..., min_length=1, description="Tracked asset ID")
    asset_name: str = Field(default="", description="Display name of the asset")
    target_price: float = Field(..., ge=0, description="Threshold price")
    condition: AlertCondition = Field(..., description="Fire above or below target")
    active: bool = Field(default=True, description="False once the rule has fired")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Rule creation timestamp"
    )

    model_config = {"frozen": True, "allow_inf_nan": False}

    def is_met(self, price: float) -> bool:
        """Check the threshold against a price."""
        if self.condition == "above":
            return price >= self.target_price
        return price <= self.target_price


class AlertEvent(BaseModel):
    """Notification emitted when a rule fires."""

    rule_id: int = Field(..., description="ID of the rule that fired")
    asset_id: str = Field(..., description="Asset ID")
    asset_name: str = Field(default="", description="Display name of the asset")
    condition: AlertCondition = Field(..., description="Rule condition")
    target_price: float = Field(..., description="Rule threshold")
    trigger_price: float = Field(..., description="Price that triggered the rule")
    triggered_at: datetime = Field(..., description="When the rule fired")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def message(self) -> str:
        name = self.asset_name or self.asset_id
        direction = "rose to" if self.condition == "above" else "fell to"
        return (
            f"{name} {direction} {format_price(self.trigger_price)} "
            f"(target {format_price(self.target_price)})"
        )


class AlertEvaluation(BaseModel):
    """Result of one evaluation pass over a rule list."""

    fired: list[AlertEvent] = Field(default_factory=list)
    updated_rules: list[AlertRule] = Field(default_factory=list)

    model_config = {"frozen": True, "allow_inf_nan": False}
