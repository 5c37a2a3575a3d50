"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BusinessTimeError
from ..domain.interval import Interval

app = typer.Typer(
    name="businesstime",
    help="Count business hours between two points in time",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./businesstime.yaml if present"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load an explicit config file, the default one if it exists, or the defaults."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)

    return AppConfig()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Count business hours between two points in time.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def diff(
    start: Annotated[str, typer.Argument(help="Start time, e.g. '2018-05-14 09:00' or 'now'")],
    end: Annotated[str, typer.Argument(help="End time")],
    config_file: ConfigOption = None,
    precision: Annotated[Optional[str], typer.Option("--precision", "-p", help="Step size, e.g. 15m or 1h")] = None,
    partial: Annotated[bool, typer.Option("--partial", help="Keep fractional hours.")] = False,
):
    """
    Show the business hours between two times.

    Examples:

        businesstime diff "2018-05-14 09:00" "2018-05-15 10:00"

        businesstime diff "Friday 2018-05-18 09:30" "2018-05-21 17:45" -p 15m --partial
    """
    try:
        config = _load_config(config_file)
        business_time = config.build_factory().make(start)

        if precision:
            business_time.set_precision(Interval.parse(precision))

        if partial:
            hours = business_time.diff_in_partial_business_hours(end)
            console.print(f"[bold green]{hours:g}[/bold green] business hours")
        else:
            hours = business_time.diff_in_business_hours(end)
            console.print(f"[bold green]{hours}[/bold green] business hours")

    except (FileNotFoundError, ValueError, BusinessTimeError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def narrate(
    moment: Annotated[str, typer.Argument(help="Time to describe, e.g. 'now' or 'Monday 2018-05-14 17:30'")],
    config_file: ConfigOption = None,
):
    """
    Explain whether a time counts as business time.
    """
    try:
        config = _load_config(config_file)
        business_time = config.build_factory().make(moment)

        if business_time.is_business_time():
            verdict = "[green]business time[/green]"
        else:
            verdict = "[yellow]not business time[/yellow]"

        when = business_time.moment.format("dddd YYYY-MM-DD HH:mm")
        console.print(f"\n{when} is {verdict}: {business_time.narrate()}\n")

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Constraint", style="bold")
        table.add_column("Match")
        table.add_column("Narration", style="dim")

        for constraint in business_time.constraints:
            matched = constraint.is_business_time(business_time)
            table.add_row(
                repr(constraint),
                "[green]yes[/green]" if matched else "[red]no[/red]",
                constraint.narrate(business_time),
            )

        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, BusinessTimeError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]businesstime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
