"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.booking_api_client import BookingApiClient
from ..adapters.mock_booking_client import MockBookingClient
from ..adapters.records import slots_to_records
from ..config import AppConfig
from ..domain.availability_engine import AvailabilityEngine, sort_slots
from ..domain.exceptions import ConfigError, InputValidationError, UpstreamDataError
from ..domain.models import OverlapPolicy
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="slotbooker",
    help="Find bookable appointment slots for a business day",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_client(config: AppConfig, mock: bool, data_file: Optional[Path]):
    """Pick the mock client for --mock/--data, the HTTP client otherwise."""
    if mock or data_file is not None:
        return MockBookingClient(data_file or config.mock_data_path)
    return BookingApiClient(
        base_url=config.api.base_url,
        timeout=config.api.timeout_seconds
    )


@app.command()
def slots(
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot length in minutes (one of the configured options)")] = None,
    quantity: Annotated[Optional[int], typer.Option("--quantity", "-q", help="Number of concurrent resources needed")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    mock: Annotated[bool, typer.Option("--mock", help="Use the bundled sample day instead of the booking API.")] = False,
    data_file: Annotated[Optional[Path], typer.Option("--data", help="Serve the schedule from this JSON file (implies --mock).")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Reject any slot that overlaps a block or appointment.")] = False,
    sort: Annotated[bool, typer.Option("--sort", help="Sort slots chronologically across business-hour windows.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print slots as JSON records.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
):
    """
    List available slots for the requested duration and quantity.

    Examples:

        # Defaults from config (60 minutes, quantity 2)
        slotbooker slots

        # Two-hour slots for one person, sorted
        slotbooker slots -d 120 -q 1 --sort

        # Offline, with a custom day
        slotbooker slots --data day.json --json
    """
    _configure_logging(verbose)

    try:
        config = AppConfig.load(config_file)

        duration = duration if duration is not None else config.defaults.duration_minutes
        quantity = quantity if quantity is not None else config.defaults.quantity
        config.validate_duration(duration)

        policy = OverlapPolicy.INTERVAL if strict else config.overlap_policy
        engine = AvailabilityEngine(step_minutes=config.step_minutes, policy=policy)
        service = AvailabilityService(
            booking_client=_build_client(config, mock, data_file),
            engine=engine,
            on_upstream_error=config.on_upstream_error
        )

        found = asyncio.run(service.find_slots(duration=duration, quantity=quantity))

    except (FileNotFoundError, ConfigError, InputValidationError, UpstreamDataError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if sort:
        found = sort_slots(found)

    if as_json:
        typer.echo(json.dumps(slots_to_records(found), indent=2))
        return

    console.print()
    if not found:
        console.print(
            "[yellow]No available slots found.[/yellow]\n"
            "Try a shorter duration or a smaller quantity."
        )
        console.print()
        return

    console.print(
        f"[bold green]✓ {len(found)} available slot(s)[/bold green] "
        f"for {duration} min, quantity {quantity}:\n"
    )

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="bold green")
    table.add_column("End", style="green")

    for idx, slot in enumerate(found, 1):
        record = slot.to_record()
        table.add_row(str(idx), record["start_time"], record["end_time"])

    console.print(table)
    console.print()


@app.command()
def options(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Show the offered durations and the search defaults.
    """
    try:
        config = AppConfig.load(config_file)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title="Search options", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="bold yellow")
    table.add_column("Value")

    table.add_row("Durations (min)", ", ".join(str(d) for d in config.duration_options))
    table.add_row("Default duration (min)", str(config.defaults.duration_minutes))
    table.add_row("Default quantity", str(config.defaults.quantity))
    table.add_row("Step (min)", str(config.step_minutes))
    table.add_row("Overlap policy", config.overlap_policy.value)
    table.add_row("Booking API", config.api.base_url)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbooker[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
