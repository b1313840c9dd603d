"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.memory_store import InMemoryBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.availability import DayStatus
from ..domain.exceptions import VenueBookingError
from ..domain.models import BookingRequest, PackageType, as_date
from ..domain.package_rules import PACKAGE_RULES
from ..services.booking_scheduler import BookingSchedulerService

app = typer.Typer(
    name="venuebooking",
    help="Check booking eligibility and availability for a single-inventory venue",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
BookingsOption = Annotated[Optional[Path], typer.Option("--bookings", "-b", help="JSON file with existing bookings")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")]

DAY_STATUS_STYLES = {
    DayStatus.AVAILABLE: "green",
    DayStatus.GUEST: "bold red",
    DayStatus.PREP: "yellow",
    DayStatus.TEARDOWN: "yellow",
    DayStatus.RESET: "dim",
}


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the config file. Without ``--config`` a missing default file falls
    back to the built-in venue defaults.
    """
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, bookings_file: Optional[Path]) -> BookingSchedulerService:
    settings = config.to_venue_settings()
    source = bookings_file or config.bookings_file
    if source is None:
        store = InMemoryBookingStore(settings=settings)
    else:
        store = InMemoryBookingStore.from_json(source, settings=settings)
    return BookingSchedulerService(store=store)


def _fail(message) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


@app.command()
def check(
    package: Annotated[str, typer.Argument(help="Package type: 3_day_weekend, 5_day_extended or 10_day_experience")],
    start: Annotated[str, typer.Argument(help="Start date (YYYY-MM-DD)")],
    reception: Annotated[int, typer.Option("--reception", "-r", help="Reception guests")] = 0,
    camping: Annotated[int, typer.Option("--camping", help="Camping guests")] = 0,
    rv_sites: Annotated[int, typer.Option("--rv", help="RV sites")] = 0,
    today: Annotated[Optional[str], typer.Option("--today", help="Reference date for last-minute detection (YYYY-MM-DD)")] = None,
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
    verbose: VerboseOption = False,
):
    """
    Validate a proposed booking against the venue's scheduling rules.

    Examples:

        venuebooking check 5_day_extended 2026-06-11

        venuebooking check 3_day_weekend 2026-07-10 --reception 120 --camping 70 -b bookings.json
    """
    _setup_logging(verbose)

    try:
        config = _load_config(config_file)
        service = _build_service(config, bookings_file)
        request = BookingRequest(
            package_type=package,
            start_date=start,
            reception_guests=reception,
            camping_guests=camping,
            rv_sites=rv_sites,
        )
        reference_day = as_date(today) if today else None
        result = asyncio.run(service.check_booking(request, today=reference_day))
    except (FileNotFoundError, ValueError, VenueBookingError) as e:
        _fail(e)

    window = result.window
    lines = [
        f"[bold]Package:[/bold] {window.package_type.label}",
        f"[bold]Stay:[/bold] {window.start_date.to_date_string()} - {window.end_date.to_date_string()} ({window.nights} nights)",
    ]
    if result.prep_teardown.prep_days:
        prep = ", ".join(d.to_date_string() for d in result.prep_teardown.prep_days)
        teardown = ", ".join(d.to_date_string() for d in result.prep_teardown.teardown_days)
        lines.append(f"[bold]Prep:[/bold] {prep}")
        lines.append(f"[bold]Teardown:[/bold] {teardown}")
    if result.is_last_minute:
        lines.append(f"[yellow]Last-minute booking ({result.days_until_start} days out)[/yellow]")

    console.print()
    console.print(Panel.fit("\n".join(lines), title=config.business_name))

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    if result.is_bookable:
        console.print("[bold green]✓ Bookable[/bold green]\n")
        return

    for error in result.errors:
        console.print(f"[red]✗ {error.message}[/red]")
    console.print()
    raise typer.Exit(1)


@app.command()
def availability(
    package: Annotated[str, typer.Argument(help="Package type")],
    start: Annotated[str, typer.Option("--from", help="First date to consider (YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--to", help="Last date to consider (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
    verbose: VerboseOption = False,
):
    """
    List the dates on which a package could start.
    """
    _setup_logging(verbose)

    try:
        config = _load_config(config_file)
        service = _build_service(config, bookings_file)
        package_type = PackageType.parse(package)
        open_dates = asyncio.run(service.find_open_start_dates(package_type, start, end))
    except (FileNotFoundError, ValueError, VenueBookingError) as e:
        _fail(e)

    console.print()
    if not open_dates:
        console.print(f"[yellow]⚠ No open start dates for {package_type.label} in this range.[/yellow]\n")
        return

    console.print(f"[bold green]✓ {len(open_dates)} open start date(s) for {package_type.label}:[/bold green]\n")
    for open_date in open_dates:
        console.print(f"  {open_date.format('dddd, YYYY-MM-DD')}")
    console.print()


@app.command()
def calendar(
    start: Annotated[str, typer.Option("--from", help="First date (YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--to", help="Last date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
    verbose: VerboseOption = False,
):
    """
    Show day-by-day occupancy, including prep, teardown and reset days.
    """
    _setup_logging(verbose)

    try:
        config = _load_config(config_file)
        service = _build_service(config, bookings_file)
        days = asyncio.run(service.occupancy_calendar(start, end))
    except (FileNotFoundError, ValueError, VenueBookingError) as e:
        _fail(e)

    table = Table(title="Occupancy", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Day", style="dim")
    table.add_column("Status")
    table.add_column("Booking", style="dim")

    for day in days:
        style = DAY_STATUS_STYLES[day.status]
        table.add_row(
            day.date.to_date_string(),
            day.date.format("ddd"),
            f"[{style}]{day.status.value}[/{style}]",
            day.booking_id or "",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def packages():
    """
    List package types with their length and allowed start days.
    """
    table = Table(title="Packages", show_header=True, header_style="bold cyan")
    table.add_column("Package", style="bold yellow")
    table.add_column("Type", style="dim")
    table.add_column("Nights", justify="right")
    table.add_column("Starts on")

    for package_type, rule in PACKAGE_RULES.items():
        table.add_row(
            package_type.label,
            package_type.value,
            str(rule.duration_nights),
            rule.describe_start_days(),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]venuebooking[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
