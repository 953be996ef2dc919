# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from almanac import configuration
from almanac.repository.configuration import CONFIGURATION_REPO
from almanac.terminal.custom_typer import AliasedTyperGroup
from almanac.terminal.parse import parse_granularity

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("calendar_default_view", config["calendar_default_view"])
    table.add_row("calendar_day_start_hour", str(config["calendar_day_start_hour"]))
    table.add_row(
        "calendar_quarter_hour_px", str(config["calendar_quarter_hour_px"])
    )
    table.add_row("now_refresh_seconds", str(config["now_refresh_seconds"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)


@app.command("default-view, dv")
def default_view(
    granularity: Annotated[
        str, typer.Argument(help="View opened by default: day, week or month")
    ],
) -> None:
    """Set the view the calendar opens with."""
    CONFIGURATION_REPO.update_config(
        calendar_default_view=parse_granularity(granularity)
    )


@app.command("start-hour, sh")
def start_hour(
    hour: Annotated[int, typer.Argument(help="First hour of the day/week grid (0-23)")],
) -> None:
    """Set the first hour shown by the day and week time grids."""
    try:
        CONFIGURATION_REPO.update_config(calendar_day_start_hour=hour)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command("quarter-hour-px, qp")
def quarter_hour_px(
    pixels: Annotated[
        int, typer.Argument(help="Height of one quarter hour on the time grid")
    ],
) -> None:
    """
    Set the quarter-hour height used for pixel offsets on the time grid.

    The terminal views always draw one line per quarter hour, so this value
    does not change their layout. It only scales offsets for pixel-based
    layouts.
    """
    try:
        CONFIGURATION_REPO.update_config(calendar_quarter_hour_px=pixels)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command("header, hd")
def show_header(
    enabled: Annotated[
        bool, typer.Option("--enabled/--disabled", help="Show the view header")
    ] = True,
) -> None:
    """Enable or disable the header printed above calendar views."""
    CONFIGURATION_REPO.update_config(show_header=enabled)
