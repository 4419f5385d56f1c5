"""Analyze command for cryptodash CLI.

Calculates and displays the technical analysis of a candle window.
"""

import json
from pathlib import Path
from typing import Optional

import click
from pydantic import TypeAdapter
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cryptodash.formatting import format_price
from cryptodash.models import Candle
from cryptodash.tools.analysis import analyze_window

console = Console()

_CANDLES = TypeAdapter(list[Candle])

POLARITY_COLORS = {
    "bullish": "green",
    "bearish": "red",
    "neutral": "yellow",
}

RSI_LABELS = {
    "overbought": ("Overbought", "red"),
    "oversold": ("Oversold", "green"),
    "neutral": ("Neutral", "dim"),
}


def load_candles(path: Path) -> list[Candle]:
    """Load a candle window from a JSON array file.

    Args:
        path: File containing ``[{"time", "open", "high", "low", "close", "volume"}, ...]``
            in chronological order.

    Returns:
        List of validated candles in file order.
    """
    return _CANDLES.validate_json(Path(path).read_text())


def _render_indicators(results: dict) -> Table:
    table = Table(
        title="Indicators",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Indicator", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Signal")

    rsi = results["rsi"]
    label, color = RSI_LABELS[rsi["signal"]]
    table.add_row("RSI(14)", f"{rsi['value']:.1f}", f"[{color}]{label}[/{color}]")

    macd = results["macd"]
    color = "green" if macd["trend"] == "bullish" else "red"
    table.add_row(
        "MACD",
        f"{macd['macd']:.2f}",
        f"[{color}]{macd['trend'].capitalize()}[/{color}]",
    )

    bands = results["bollinger"]
    if bands["active"]:
        table.add_row(
            "Bollinger Bands",
            f"{format_price(bands['lower'][-1]['value'])} - {format_price(bands['upper'][-1]['value'])}",
            "[green]Active[/green]",
        )
    else:
        table.add_row("Bollinger Bands", "-", "[dim]Insufficient data[/dim]")

    for name, series in results["overlays"].items():
        label = name.replace("_", "(").upper() + ")"
        value = format_price(series[-1]["value"]) if series else "-"
        table.add_row(label, value, "" if series else "[dim]Insufficient data[/dim]")

    return table


def _render_patterns(results: dict) -> Optional[Table]:
    if not results["patterns"]:
        return None

    table = Table(
        title=f"Detected Patterns ({len(results['patterns'])})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Pattern", style="bold")
    table.add_column("Type")
    table.add_column("Confidence", justify="right")
    table.add_column("Description", style="dim")

    for pattern in results["patterns"]:
        color = POLARITY_COLORS[pattern["polarity"]]
        table.add_row(
            pattern["name"],
            f"[{color}]{pattern['polarity']}[/{color}]",
            f"{pattern['confidence']}%",
            pattern["description"],
        )
    return table


def _render_geometry(results: dict) -> Table:
    table = Table(title="Candle Geometry", show_header=True, header_style="bold cyan")
    for column in ("Time", "X", "Body Top", "Body Bottom", "Wick Top", "Wick Bottom"):
        table.add_column(column, justify="right")

    for g in results["geometry"]:
        color = "green" if g["is_bullish"] else "red"
        table.add_row(
            f"[{color}]{g['time']}[/{color}]",
            f"{g['x']:.1f}",
            f"{g['body_top']:.1f}",
            f"{g['body_bottom']:.1f}",
            f"{g['wick_top']:.1f}",
            f"{g['wick_bottom']:.1f}",
        )
    return table


@click.command()
@click.argument("candles_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "-n", default=None, help="Asset name shown in the header.")
@click.option("--geometry", is_flag=True, help="Also show per-candle chart coordinates.")
@click.option("--json", "as_json", is_flag=True, help="Print raw results as JSON.")
def analyze(candles_file: Path, name: Optional[str], geometry: bool, as_json: bool) -> None:
    """Run technical analysis on a candle window.

    CANDLES_FILE is a JSON array of OHLCV candles, oldest first.

    \b
    Examples:
      cryptodash analyze btc.json
      cryptodash analyze btc.json --name Bitcoin --geometry
      cryptodash analyze btc.json --json
    """
    try:
        candles = load_candles(candles_file)
        results = analyze_window(candles, asset_name=name, include_geometry=geometry)
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to analyze {candles_file}:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    if results["error"]:
        console.print(f"[yellow]{results['error']}[/yellow]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(results, indent=2))
        return

    title = name or candles_file.stem
    extent = results["extent"]
    console.print(Panel(
        f"[bold]{title}[/bold]  {results['data_points']} candles\n"
        f"Range: {format_price(extent['min'])} - {format_price(extent['max'])}",
        title="[bold]Candlestick Analysis[/bold]",
        border_style="cyan",
    ))

    console.print(_render_indicators(results))

    patterns = _render_patterns(results)
    if patterns is not None:
        console.print(patterns)

    recommendation = results["recommendation"]
    if recommendation is not None:
        color = recommendation["color"]
        console.print(Panel(
            f"[bold {color}]{recommendation['signal']}[/bold {color}]\n\n"
            f"[dim]{recommendation['reason']}[/dim]",
            title="[bold]Trade Recommendation[/bold]",
            border_style=color,
        ))

    last = results["last_candle"]
    console.print(
        f"\n[bold]Current candle:[/bold] "
        f"Open ${format_price(last['open'])}  "
        f"Close ${format_price(last['close'])}  "
        f"[green]High ${format_price(last['high'])}[/green]  "
        f"[red]Low ${format_price(last['low'])}[/red]"
    )

    if geometry:
        console.print(_render_geometry(results))
