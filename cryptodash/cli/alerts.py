"""Alert watch command for cryptodash CLI.

Polls a price snapshot file, evaluates one-shot alert rules against it
and prints a notification for every rule that fires.
"""

import re
import time
from pathlib import Path
from typing import Optional

import click
from pydantic import TypeAdapter
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cryptodash.alerts import AlertBook, snapshot_from_quotes
from cryptodash.formatting import format_compact, format_price
from cryptodash.config import load_config
from cryptodash.models import AlertEvent, AssetQuote

console = Console()

_QUOTES = TypeAdapter(list[AssetQuote])

# ASSET:above|below:PRICE, e.g. "1:above:45000"
RULE_PATTERN = re.compile(
    r"^\s*(?P<asset>[^:]+?)\s*:\s*(?P<condition>above|below)\s*:\s*(?P<price>\d+(?:\.\d+)?)\s*$",
    re.IGNORECASE,
)


def parse_rule(rule: str) -> dict:
    """Parse a ``ASSET:above|below:PRICE`` rule string.

    Args:
        rule: The rule string to parse.

    Returns:
        Dictionary with asset_id, condition and target_price.

    Raises:
        click.BadParameter: If the string does not match the format.
    """
    match = RULE_PATTERN.match(rule)
    if not match:
        raise click.BadParameter(
            f"Invalid rule '{rule}'. Expected ASSET:above|below:PRICE"
        )
    return {
        "asset_id": match.group("asset"),
        "condition": match.group("condition").lower(),
        "target_price": float(match.group("price")),
    }


def load_quotes(path: Path) -> list[AssetQuote]:
    """Load the current asset snapshot from a JSON array file."""
    return _QUOTES.validate_json(Path(path).read_text())


def _quotes_table(quotes: list[AssetQuote]) -> Table:
    table = Table(title="Market Snapshot", show_header=True, header_style="bold cyan")
    table.add_column("Asset", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("24h", justify="right")
    table.add_column("Volume", justify="right", style="dim")
    table.add_column("Market Cap", justify="right", style="dim")

    for q in quotes:
        if q.change_24h >= 0:
            change = f"[green]▲ +{q.change_24h:.2f}%[/green]"
        else:
            change = f"[red]▼ {q.change_24h:.2f}%[/red]"
        table.add_row(
            f"{q.name} ({q.symbol})",
            f"${format_price(q.price)}",
            change,
            format_compact(q.volume),
            format_compact(q.market_cap),
        )
    return table


def _print_event(event: AlertEvent) -> None:
    color = "green" if event.condition == "above" else "red"
    console.print(Panel(
        f"[bold]{event.message}[/bold]\n\n"
        f"[dim]Rule #{event.rule_id} · {event.triggered_at:%Y-%m-%d %H:%M:%S}[/dim]",
        title="[bold]Price Alert[/bold]",
        border_style=color,
    ))


def run_tick(book: AlertBook, quotes_file: Path, show_quotes: bool = False) -> list[AlertEvent]:
    """Run one polling tick: read the snapshot and evaluate the book.

    Args:
        book: Alert book owned by the polling loop.
        quotes_file: Snapshot file written by the data feed.
        show_quotes: Print the snapshot table before evaluating.

    Returns:
        Events fired during this tick.
    """
    quotes = load_quotes(quotes_file)
    if show_quotes:
        console.print(_quotes_table(quotes))

    names = {q.id: q.name for q in quotes}
    events = book.evaluate(snapshot_from_quotes(quotes))
    for event in events:
        if not event.asset_name:
            event = event.model_copy(update={"asset_name": names.get(event.asset_id, "")})
        _print_event(event)
    return events


@click.command("alerts")
@click.argument("quotes_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--rule", "-r", "rules",
    multiple=True,
    help="Alert rule as ASSET:above|below:PRICE (repeatable).",
)
@click.option(
    "--interval", "-i",
    type=click.IntRange(min=1),
    default=None,
    help="Seconds between polls (default from config, 60).",
)
@click.option("--once", is_flag=True, help="Evaluate a single tick and exit.")
@click.pass_context
def alerts(
    ctx: click.Context,
    quotes_file: Path,
    rules: tuple[str, ...],
    interval: Optional[int],
    once: bool,
) -> None:
    """Watch prices and fire one-shot alerts.

    QUOTES_FILE is a JSON array of asset quotes that the data feed keeps
    up to date. It is re-read on every poll. Rules come from the config
    file and from --rule options; each rule fires at most once.

    Press Ctrl+C to stop watching.

    \b
    Examples:
      cryptodash alerts quotes.json --rule 1:above:45000 --once
      cryptodash alerts quotes.json -r 2:below:2200 -i 30
    """
    try:
        config = load_config(ctx.obj.get("config_path") if ctx.obj else None)
        book = config.build_alert_book()
        for rule in rules:
            book.add(**parse_rule(rule))
    except click.BadParameter:
        raise
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to load alerts:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    if len(book) == 0:
        console.print(Panel(
            "[dim]No alerts set. Add [[alerts]] to the config file or pass --rule.[/dim]",
            title="[bold]Alerts[/bold]",
            border_style="dim",
        ))
        return

    refresh = interval or config.poll_interval

    try:
        if once:
            events = run_tick(book, quotes_file, show_quotes=True)
            console.print(f"\n[dim]{len(events)} alert(s) fired, {len(book.active_rules())} active[/dim]")
            return

        console.print(
            f"[dim]Watching {len(book)} alert(s), refreshing every {refresh}s...[/dim]\n"
        )
        while book.active_rules():
            run_tick(book, quotes_file)
            if not book.active_rules():
                break
            time.sleep(refresh)
        console.print("[dim]All alerts have fired.[/dim]")

    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching.[/dim]")
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to evaluate alerts:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)
