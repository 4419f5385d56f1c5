"""Tests for configuration loading.

**Feature: crypto-dashboard**
"""

from pathlib import Path

import pytest
import toml
from pydantic import ValidationError

from cryptodash.config import DEFAULT_POLL_INTERVAL, DashboardConfig, load_config


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(content)
    return path


class TestLoadConfig:
    """The TOML config seeds settings and the in-memory alert book."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.toml")

        assert config == DashboardConfig()
        assert config.poll_interval == DEFAULT_POLL_INTERVAL
        assert config.alerts == []

    def test_reads_dashboard_and_alerts(self, tmp_path: Path):
        path = write_config(tmp_path, """
[dashboard]
poll_interval = 15

[[alerts]]
asset_id = "1"
asset_name = "Bitcoin"
target_price = 45000
condition = "above"

[[alerts]]
asset_id = "2"
target_price = 2200.5
condition = "below"
""")
        config = load_config(path)

        assert config.poll_interval == 15
        assert [a.asset_id for a in config.alerts] == ["1", "2"]
        assert config.alerts[1].target_price == 2200.5

    def test_build_alert_book(self, tmp_path: Path):
        path = write_config(tmp_path, """
[[alerts]]
asset_id = "1"
asset_name = "Bitcoin"
target_price = 45000
condition = "above"
""")
        book = load_config(path).build_alert_book()

        (rule,) = book.rules
        assert rule.id == 1
        assert rule.asset_name == "Bitcoin"
        assert rule.active

    def test_invalid_condition_raises(self, tmp_path: Path):
        path = write_config(tmp_path, """
[[alerts]]
asset_id = "1"
target_price = 45000
condition = "sideways"
""")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_invalid_poll_interval_raises(self, tmp_path: Path):
        path = write_config(tmp_path, "[dashboard]\npoll_interval = 0\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_malformed_toml_raises(self, tmp_path: Path):
        path = write_config(tmp_path, "[dashboard\npoll_interval = ")
        with pytest.raises(toml.TomlDecodeError):
            load_config(path)

    def test_overflowing_target_raises(self, tmp_path: Path):
        path = write_config(tmp_path, """
[[alerts]]
asset_id = "1"
target_price = 1e400
condition = "above"
""")
        with pytest.raises(ValidationError):
            load_config(path)
