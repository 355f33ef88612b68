"""CLI application for vault size history using Rich and Typer."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.bar import Bar
from rich.console import Console
from rich.table import Table

from vaultsize.core.aggregator import HistoryAggregator
from vaultsize.core.chart import build_chart_config
from vaultsize.core.config import setup_logging, validate_environment
from vaultsize.core.errors import HistoryError
from vaultsize.core.factory import build_aggregator
from vaultsize.core.scheduler import HistoryScheduler
from vaultsize.core.types import SizeHistory

app = typer.Typer(
    name="vaultsize",
    help="Vault size history - daily file counts for a vault",
    no_args_is_help=True,
)

console = Console()

BAR_WIDTH = 30


def _vault_name(aggregator: HistoryAggregator) -> str:
    name = getattr(aggregator.catalog, "name", None)
    return name if isinstance(name, str) and name else "vault"


def _get_aggregator(ctx: typer.Context) -> HistoryAggregator:
    """Build the aggregator from the global options."""
    options = ctx.obj or {}
    try:
        return build_aggregator(
            vault_dir=options.get("vault"),
            backend=options.get("backend"),
        )
    except (HistoryError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _run_update(aggregator: HistoryAggregator) -> SizeHistory:
    try:
        return aggregator.update()
    except HistoryError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def render_history(history: SizeHistory, vault_name: str) -> Table:
    """Build a table with one row per datapoint and a size bar."""
    table = Table(title=f"Vault size history: {vault_name}", show_header=True)
    table.add_column("Day", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("")

    peak = max((dp.size for dp in history.datapoints), default=0)
    previous: int | None = None
    for dp in history.datapoints:
        if previous is None:
            change = ""
        elif dp.size >= previous:
            change = f"[green]+{dp.size - previous}[/green]"
        else:
            change = f"[red]{dp.size - previous}[/red]"
        table.add_row(
            dp.day,
            str(dp.size),
            change,
            Bar(size=peak or 1, begin=0, end=dp.size, width=BAR_WIDTH),
        )
        previous = dp.size

    return table


@app.callback()
def main(
    ctx: typer.Context,
    vault: Optional[str] = typer.Option(
        None,
        "--vault",
        "-v",
        help="Vault directory to count (default: $VAULTSIZE_VAULT_DIR or cwd)",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        "-b",
        help="History backend: json or sqlite",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Vault size history - daily file counts for a vault."""
    if debug:
        setup_logging("DEBUG")
        console.print("[dim]Debug logging enabled[/dim]")
    else:
        setup_logging()

    is_valid, message = validate_environment(backend=backend)
    if not is_valid:
        console.print(f"[red]Error: {message}[/red]")
        raise typer.Exit(1)

    ctx.obj = {"vault": vault, "backend": backend}


@app.command()
def update(ctx: typer.Context):
    """Run one aggregation cycle."""
    aggregator = _get_aggregator(ctx)
    history = _run_update(aggregator)
    last = history.last
    console.print(
        f"[green]{last.day}: {last.size} files[/green] "
        f"[dim]({len(history.datapoints)} datapoints)[/dim]"
    )


@app.command()
def show(ctx: typer.Context):
    """Update the history and display it."""
    aggregator = _get_aggregator(ctx)
    history = _run_update(aggregator)
    console.print(render_history(history, _vault_name(aggregator)))


@app.command()
def chart(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the chart config to this file instead of stdout",
    ),
):
    """Export the history as XY chart config (JSON)."""
    aggregator = _get_aggregator(ctx)
    try:
        history = aggregator.get_history()
    except HistoryError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    config = build_chart_config(history, _vault_name(aggregator))
    if output is None:
        console.print_json(data=config)
        return

    output.write_text(json.dumps(config, indent=2), encoding="utf-8")
    console.print(f"[green]Chart written to {output}[/green]")


@app.command()
def watch(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between cycles (default: $VAULTSIZE_UPDATE_INTERVAL)",
    ),
):
    """Update the history now and then on every interval."""
    aggregator = _get_aggregator(ctx)

    def _report(history: SizeHistory) -> None:
        last = history.last
        console.print(f"[dim]{last.day}[/dim] {last.size} files")

    try:
        scheduler = HistoryScheduler(
            aggregator, interval_seconds=interval, on_update=_report
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(
        f"[dim]Watching {aggregator.catalog!r} every "
        f"{scheduler.interval_seconds}s. Ctrl+C to stop.[/dim]"
    )
    try:
        asyncio.run(scheduler.run())
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


@app.command()
def health(ctx: typer.Context):
    """Check store and vault health."""
    aggregator = _get_aggregator(ctx)
    health_status = aggregator.health_check()

    table = Table(title="Health Check", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Message")

    all_healthy = True
    for component, (healthy, message) in health_status.items():
        status = "[green]OK[/green]" if healthy else "[red]FAILED[/red]"
        table.add_row(component.title(), status, message)
        if not healthy:
            all_healthy = False

    console.print(table)
    raise typer.Exit(0 if all_healthy else 1)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
