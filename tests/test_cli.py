"""Tests for the cryptodash command line.

**Feature: crypto-dashboard**
"""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from cryptodash.cli.alerts import parse_rule
from cryptodash.cli.main import cli
from cryptodash.formatting import format_compact, format_price


def write_candles(path: Path, num_candles: int = 40) -> Path:
    candles = []
    for i in range(num_candles):
        price = 100.0 + (i % 7) - 3
        candles.append({
            "time": f"10:{i:02d}",
            "open": price,
            "high": price + 2.0,
            "low": price - 1.5,
            "close": price + 0.5,
            "volume": 1000 + i,
        })
    path.write_text(json.dumps(candles))
    return path


def write_quotes(path: Path) -> Path:
    path.write_text(json.dumps([
        {"id": "1", "name": "Bitcoin", "symbol": "BTC", "price": 45100.0,
         "change24h": 2.45, "volume": 28500000000, "marketCap": 847000000000},
        {"id": "2", "name": "Ethereum", "symbol": "ETH", "price": 2280.75,
         "change24h": -1.2, "volume": 12300000000, "marketCap": 274000000000},
    ]))
    return path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def no_config(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "missing.toml")]


class TestAnalyzeCommand:
    """The analyze command renders or dumps the window analysis."""

    def test_json_output(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        path = write_candles(tmp_path / "btc.json")

        result = runner.invoke(cli, no_config + ["analyze", str(path), "--json", "-n", "Bitcoin"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["asset"] == "Bitcoin"
        assert data["data_points"] == 40
        assert data["error"] is None

    def test_table_output(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        path = write_candles(tmp_path / "btc.json")

        result = runner.invoke(cli, no_config + ["analyze", str(path), "--geometry"])

        assert result.exit_code == 0, result.output
        assert "Candlestick Analysis" in result.output
        assert "RSI(14)" in result.output
        assert "Candle Geometry" in result.output

    def test_empty_window_fails(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        path = tmp_path / "empty.json"
        path.write_text("[]")

        result = runner.invoke(cli, no_config + ["analyze", str(path)])

        assert result.exit_code == 1

    def test_invalid_candles_fail(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"time": "a", "open": -1, "high": 1, "low": 1, "close": 1}]))

        result = runner.invoke(cli, no_config + ["analyze", str(path)])

        assert result.exit_code == 1
        assert "Failed to analyze" in result.output

    def test_overflowing_price_fails(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        path = write_candles(tmp_path / "btc.json", num_candles=3)
        path.write_text(path.read_text().replace('"high": 99.0', '"high": 1e400', 1))
        assert "1e400" in path.read_text()

        result = runner.invoke(cli, no_config + ["analyze", str(path), "--json"])

        assert result.exit_code == 1
        assert "Failed to analyze" in result.output
        assert "NaN" not in result.output


class TestAlertsCommand:
    """The alerts command evaluates one-shot rules against a snapshot."""

    def test_once_fires_matching_rule(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        quotes = write_quotes(tmp_path / "quotes.json")

        result = runner.invoke(cli, no_config + [
            "alerts", str(quotes), "--once",
            "-r", "1:above:45000",
            "-r", "2:below:2000",
        ])

        assert result.exit_code == 0, result.output
        assert "Price Alert" in result.output
        assert "Bitcoin rose to 45100.00" in result.output
        assert "1 alert(s) fired, 1 active" in result.output

    def test_rules_from_config(self, runner: CliRunner, tmp_path: Path):
        quotes = write_quotes(tmp_path / "quotes.json")
        config = tmp_path / "config.toml"
        config.write_text(
            '[[alerts]]\nasset_id = "2"\nasset_name = "Ethereum"\n'
            'target_price = 2300\ncondition = "below"\n'
        )

        result = runner.invoke(cli, ["--config", str(config), "alerts", str(quotes), "--once"])

        assert result.exit_code == 0, result.output
        assert "Ethereum fell to 2280.75" in result.output

    def test_no_rules(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        quotes = write_quotes(tmp_path / "quotes.json")

        result = runner.invoke(cli, no_config + ["alerts", str(quotes), "--once"])

        assert result.exit_code == 0
        assert "No alerts set" in result.output

    def test_bad_rule_is_usage_error(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        quotes = write_quotes(tmp_path / "quotes.json")

        result = runner.invoke(cli, no_config + ["alerts", str(quotes), "-r", "btc:sideways:1"])

        assert result.exit_code == 2
        assert "ASSET:above|below:PRICE" in result.output

    def test_watch_stops_when_all_fired(self, runner: CliRunner, tmp_path: Path, no_config: list[str]):
        quotes = write_quotes(tmp_path / "quotes.json")

        result = runner.invoke(cli, no_config + ["alerts", str(quotes), "-r", "1:above:1"])

        assert result.exit_code == 0, result.output
        assert "All alerts have fired." in result.output


class TestParseRule:
    """Rule strings are parsed as ASSET:above|below:PRICE."""

    def test_valid_rule(self):
        assert parse_rule("bitcoin:ABOVE:45000.5") == {
            "asset_id": "bitcoin",
            "condition": "above",
            "target_price": 45000.5,
        }

    def test_whitespace_tolerated(self):
        assert parse_rule(" 2 : below : 2200 ")["asset_id"] == "2"

    @pytest.mark.parametrize("rule", ["", "btc", "btc:above", "btc:near:1", "btc:above:-5", ":above:1"])
    def test_invalid_rule(self, rule: str):
        with pytest.raises(click.BadParameter):
            parse_rule(rule)


class TestFormatting:
    """Prices and large quantities are formatted for display."""

    @pytest.mark.parametrize("price,expected", [
        (43250.5, "43250.50"),
        (1.0, "1.00"),
        (0.5234, "0.5234"),
        (0.00001234, "0.0000"),
    ])
    def test_format_price(self, price: float, expected: str):
        assert format_price(price) == expected

    @pytest.mark.parametrize("value,expected", [
        (28_500_000_000, "28.5B"),
        (847_000_000_000, "847B"),
        (1_200_000_000_000, "1.2T"),
        (3_400_000, "3.4M"),
        (1_500, "1.5K"),
        (950, "950"),
    ])
    def test_format_compact(self, value: float, expected: str):
        assert format_compact(value) == expected
