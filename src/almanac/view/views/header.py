# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

from rich.console import Console
from rich.padding import Padding

# Set from configuration at start-up and overridden by --no-header
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()


def header(console: Console, heading: str, sub_header: Optional[str] = None) -> None:
    """Print the application header above a calendar view.

    Args:
        console: Console to print to
        heading: The navigation heading (e.g. "June 2024")
        sub_header: Optional sub-header text to display, such as active filters
    """
    if not get_show_header():
        return

    console.print(Padding("[dark_orange]almanac[/dark_orange]", (1, 0, 0, 1)))
    console.print(Padding(f"[bold]{heading}[/bold]", (0, 1)))
    if sub_header is not None:
        console.print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))
