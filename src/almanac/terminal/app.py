# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from almanac.terminal import calendar, configuration
from almanac.terminal.custom_typer import OrderedAliasedTyperGroup
from almanac.view.views.header import set_show_header

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Almanac - Notes, expenses and income on one calendar",
    no_args_is_help=True,
)
app.command(name="day, d")(calendar.day)
app.command(name="week, w")(calendar.week)
app.command(name="month, m")(calendar.month)
app.command(name="browse, b")(calendar.browse)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output above calendar views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log skipped records and timer events"),
    ] = False,
) -> None:
    """
    Almanac - Notes, expenses and income on one calendar

    Global options that apply to all commands.
    """
    if no_header:
        set_show_header(False)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(rich_tracebacks=True)],
        )


def run() -> None:
    app()
