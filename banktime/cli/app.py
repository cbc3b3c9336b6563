"""
Main CLI application using Typer.
"""

import logging
from datetime import MAXYEAR, MINYEAR
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import AppConfig
from ..domain.business_time import BusinessTime
from ..domain.exceptions import BankTimeError, ParseError
from ..domain.holidays import holidays_for_year
from ..logging_config import configure_logging

app = typer.Typer(
    name="banktime",
    help="Banking-day calendar: weekends, US federal holidays and banking-day arithmetic",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./banktime.yaml")
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load configuration and set up logging, exiting on failure."""
    try:
        config = AppConfig.load(config_file)
    except (BankTimeError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    configure_logging(config.log_level)
    logger.debug("Loaded configuration: %s", config)
    return config


def _parse_when(text: Optional[str], tz: str) -> BusinessTime:
    """
    Resolve a user supplied timestamp.

    Accepts RFC 3339 timestamps or plain YYYY-MM-DD dates (midnight in ``tz``).
    No input means now.

    Raises:
        ParseError: If the text matches neither form
    """
    if not text:
        return BusinessTime.now(tz)

    try:
        return BusinessTime.unmarshal_text(text).in_timezone(tz)
    except ParseError as parse_error:
        try:
            day = pendulum.from_format(text.strip(), "YYYY-MM-DD", tz=tz)
        except ValueError:
            raise parse_error
        return BusinessTime.lift(day, tz=tz)


def _describe(when: BusinessTime, date_format: str) -> str:
    return f"{when.instant.format('dddd')}, {when.instant.format(date_format)}"


@app.command()
def check(
    when: Annotated[Optional[str], typer.Argument(help="Timestamp (RFC 3339) or date (YYYY-MM-DD). Defaults to now.")] = None,
    config_file: ConfigOption = None,
):
    """
    Show weekend, holiday and banking-day status for a date.
    """
    config = _load_config(config_file)

    try:
        moment = _parse_when(when, config.timezone)
    except ParseError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    holiday = moment.holiday_name()
    banking = moment.is_banking_day()

    console.print(Panel.fit(
        f"[bold]Date:[/bold] {_describe(moment, config.output_format)}\n"
        f"[bold]Timestamp:[/bold] {moment.isoformat()}\n"
        f"[bold]Weekend:[/bold] {'yes' if moment.is_weekend() else 'no'}\n"
        f"[bold]Holiday:[/bold] {holiday or '-'}\n"
        f"[bold]Banking day:[/bold] "
        + ("[green]yes[/green]" if banking else "[red]no[/red]"),
        title="Banking calendar"
    ))


@app.command()
def add(
    days: Annotated[int, typer.Argument(help="Number of banking days to move (negative moves backward, use -- before it)")],
    start: Annotated[Optional[str], typer.Option("--from", "-f", help="Start timestamp or date (YYYY-MM-DD). Defaults to now.")] = None,
    config_file: ConfigOption = None,
):
    """
    Move a date forward or backward by a number of banking days.

    Examples:

        banktime add 2 --from 2018-01-11

        banktime add --from 2018-01-16 -- -2
    """
    config = _load_config(config_file)

    try:
        origin = _parse_when(start, config.timezone)
    except ParseError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    result = origin.add_banking_day(days)
    logger.debug("Moved %s by %d banking days to %s", origin, days, result)

    console.print(f"{_describe(origin, config.output_format)} + {days} banking days")
    console.print(f"[bold]{_describe(result, config.output_format)}[/bold]")


@app.command()
def holidays(
    year: Annotated[Optional[int], typer.Argument(help="Calendar year. Defaults to the current year.")] = None,
    config_file: ConfigOption = None,
):
    """
    List the observed federal holidays of a year.
    """
    config = _load_config(config_file)
    if year is None:
        year = pendulum.now(config.timezone).year
    elif not MINYEAR <= year <= MAXYEAR:
        console.print(f"[bold red]Error:[/bold red] year must be between {MINYEAR} and {MAXYEAR}, got {year}")
        raise typer.Exit(1)

    table = Table(title=f"Observed holidays {year}")
    table.add_column("Date")
    table.add_column("Weekday")
    table.add_column("Holiday")

    for day, name in holidays_for_year(year):
        observed = pendulum.date(day.year, day.month, day.day)
        table.add_row(observed.format(config.output_format), observed.format("dddd"), name)

    console.print(table)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]banktime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
