"""Configuration loading for cryptodash.

Settings live in a TOML file (default ``~/.config/cryptodash/config.toml``):

    [dashboard]
    poll_interval = 60

    [[alerts]]
    asset_id = "1"
    asset_name = "Bitcoin"
    target_price = 45000
    condition = "above"

The ``[[alerts]]`` entries only seed the in-memory alert book; fired
state is never written back.
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field

from cryptodash.alerts import AlertBook
from cryptodash.models.alert import AlertCondition

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cryptodash" / "config.toml"
DEFAULT_POLL_INTERVAL = 60


class AlertConfig(BaseModel):
    """An alert rule as written in the config file."""

    asset_id: str = Field(..., min_length=1, description="Tracked asset ID")
    asset_name: str = Field(default="", description="Display name")
    target_price: float = Field(..., ge=0, description="Threshold price")
    condition: AlertCondition = Field(..., description="above or below")

    model_config = {"frozen": True, "allow_inf_nan": False}


class DashboardConfig(BaseModel):
    """Application settings."""

    poll_interval: int = Field(
        default=DEFAULT_POLL_INTERVAL, gt=0, description="Seconds between polls"
    )
    alerts: list[AlertConfig] = Field(default_factory=list)

    model_config = {"frozen": True, "allow_inf_nan": False}

    def build_alert_book(self) -> AlertBook:
        """Create an alert book seeded with the configured rules."""
        book = AlertBook()
        for alert in self.alerts:
            book.add(
                asset_id=alert.asset_id,
                target_price=alert.target_price,
                condition=alert.condition,
                asset_name=alert.asset_name,
            )
        return book


def load_config(config_path: Optional[Path] = None) -> DashboardConfig:
    """Load settings from a TOML file.

    Args:
        config_path: Path to the config file (defaults to DEFAULT_CONFIG_PATH).

    Returns:
        Parsed settings, or defaults when the file does not exist.

    Raises:
        toml.TomlDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If a setting has an invalid value.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return DashboardConfig()

    data = toml.load(path)
    dashboard = data.get("dashboard", {})

    return DashboardConfig(
        poll_interval=dashboard.get("poll_interval", DEFAULT_POLL_INTERVAL),
        alerts=data.get("alerts", []),
    )
