"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.booking_client import BookingClient
from ..adapters.mock_offering_client import InMemoryBookingClient, MockOfferingClient
from ..adapters.offering_client import OfferingClient
from ..config import AppConfig
from ..domain.dates import parse_date_value
from ..domain.exceptions import PastSessionError, SessionFinderError
from ..domain.occurrence_generator import OccurrenceGenerator
from ..services.session_finder import OfferingSchedule, SessionFinderService

app = typer.Typer(
    name="sessionfinder",
    help="List and book workshop and cut-flower sessions",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use the bundled mock offerings instead of the API.")]
NowOption = Annotated[Optional[str], typer.Option("--now", help="Evaluate the schedule at this ISO date/time instead of the current time.")]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config = AppConfig.load_or_default(config_file)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return config


def _build_service(config: AppConfig, mock: bool) -> SessionFinderService:
    """
    Wire the service with either the HTTP adapters or the mock ones.
    """
    if mock or not config.data_source.base_url:
        if not mock:
            console.print("[yellow]⚠  No data_source.base_url configured, using mock offerings[/yellow]\n")
        offering_client = MockOfferingClient(data_file=config.mock_data_file)
    else:
        offering_client = OfferingClient(
            base_url=config.data_source.base_url,
            timeout_seconds=config.data_source.timeout_seconds
        )

    if mock or not config.booking.endpoint:
        booking_client = InMemoryBookingClient()
    else:
        booking_client = BookingClient(
            endpoint=config.booking.endpoint,
            timeout_seconds=config.booking.timeout_seconds
        )

    return SessionFinderService(
        offering_client=offering_client,
        generator=OccurrenceGenerator(timezone=config.timezone),
        booking_client=booking_client,
        locale=config.locale,
    )


def _resolve_now(now_option: Optional[str], tz: str):
    if not now_option:
        return pendulum.now(tz)

    now = parse_date_value(now_option, tz)
    if now is None:
        console.print(f"[red]Could not parse --now value: {now_option}[/red]")
        raise typer.Exit(1)
    return now


def _print_schedule(schedule: OfferingSchedule) -> None:
    offering = schedule.offering
    summary = schedule.summary

    console.print(f"[bold cyan]{offering.title}[/bold cyan] [dim]({offering.kind})[/dim]")
    console.print(f"   {summary.display_date}")
    if summary.show_times:
        console.print(f"   {summary.time_text}")
    if offering.location:
        console.print(f"   📍 {offering.location}")
    console.print()

    if schedule.is_empty:
        console.print(
            "[yellow]No sessions this month.[/yellow]\n"
            "No upcoming sessions have been scheduled yet. Please contact the studio for availability."
        )
        return

    if not schedule.has_active_sessions:
        console.print("[yellow]All listed sessions have passed. New dates will be added soon.[/yellow]\n")

    selected_id = schedule.selection.selected_occurrence_id

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold")
    table.add_column("Session")
    table.add_column("Seats", justify="right")
    table.add_column("ID", style="dim", no_wrap=True)

    for day in schedule.days:
        for index, occurrence in enumerate(day.occurrences):
            label = occurrence.label
            if occurrence.label != occurrence.time_range_label:
                label = f"{occurrence.label} ({occurrence.time_range_label})"
            if occurrence.is_past:
                label = f"[dim strike]{label}[/dim strike]"
            marker = " ←" if occurrence.id == selected_id else ""
            seats = str(occurrence.capacity) if occurrence.capacity is not None else "open"
            table.add_row(day.label if index == 0 else "", f"{label}{marker}", seats, occurrence.id)

    console.print(table)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Session finder - expand recurring schedules into bookable sessions.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def sessions(
    offering_id: Annotated[str, typer.Argument(help="Offering id, e.g. 'cut-flower-picking'")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    now: NowOption = None,
):
    """
    Show the bookable sessions of an offering, grouped by day.

    Examples:

        sessionfinder sessions cut-flower-picking --mock

        sessionfinder sessions pressed-flower-frames --mock --now 2027-02-01
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config, mock)
        now_value = _resolve_now(now, config.timezone)

        schedule = asyncio.run(service.get_schedule(offering_id, now=now_value))

        console.print()
        _print_schedule(schedule)
        console.print()

    except (FileNotFoundError, ValueError, SessionFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def book(
    offering_id: Annotated[str, typer.Argument(help="Offering id")],
    session: Annotated[str, typer.Option("--session", "-s", help="Session id as shown by 'sessions'")],
    attendees: Annotated[int, typer.Option("--attendees", "-n", help="Number of attendees")] = 1,
    option: Annotated[Optional[List[str]], typer.Option(
        "--option", "-o",
        help="Option value; repeat once per attendee for cut-flower sessions.",
    )] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    now: NowOption = None,
):
    """
    Book a session and submit the booking request.

    Examples:

        sessionfinder book cut-flower-picking -s cut-flower-picking-2026-10-17-0 -n 2 -o bucket -o jar --mock
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config, mock)
        now_value = _resolve_now(now, config.timezone)

        request = asyncio.run(
            service.book(offering_id, session, attendee_count=attendees, now=now_value, option_values=option)
        )

        total = f"R{request.estimated_total:.2f}" if request.estimated_total is not None else "on request"
        lines = [
            "[bold green]✓ Booking request submitted[/bold green]\n",
            f"[bold]Offering:[/bold] {request.title}",
            f"[bold]Day:[/bold] {request.day_label}",
            f"[bold]Session:[/bold] {request.label}",
            f"[bold]Attendees:[/bold] {request.attendee_count}",
        ]
        if request.attendee_selections:
            for selection in request.attendee_selections:
                price = f" R{selection.estimated_price:.2f}" if selection.estimated_price is not None else ""
                lines.append(f"   Attendee {selection.attendee}: {selection.option_label}{price}")
        elif request.option_label:
            lines.append(f"[bold]Option:[/bold] {request.option_label}")
        lines.append(f"[bold]Estimate:[/bold] {total}")

        console.print(Panel.fit("\n".join(lines), title="Booking"))

    except PastSessionError as e:
        console.print(f"[bold red]Booking blocked:[/bold red] {e}")
        raise typer.Exit(1)

    except (FileNotFoundError, ValueError, SessionFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_offerings(
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    List all live offerings with a short schedule description.
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config, mock)

        offerings = asyncio.run(service.list_offerings())

        if not offerings:
            console.print("[yellow]No live offerings found.[/yellow]")
            return

        table = Table(
            title="Offerings",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("ID", style="bold yellow", no_wrap=True)
        table.add_column("Title")
        table.add_column("When")
        table.add_column("Times", style="dim")

        for offering in offerings:
            summary = service.summarize(offering)
            table.add_row(
                offering.id,
                offering.title,
                summary.display_date,
                summary.time_text if summary.show_times else ""
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, SessionFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]sessionfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
