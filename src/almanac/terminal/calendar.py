# SPDX-License-Identifier: MIT

import threading
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from almanac.model.calendar_filters import CalendarFilters
from almanac.model.grid_metrics import GridMetrics
from almanac.model.navigation import Granularity, NavigationState
from almanac.repository.configuration import CONFIGURATION_REPO
from almanac.service.calendar import describe_filters, load_calendar_events
from almanac.service.navigation import (
    drill_down,
    initial_state,
    jump_to_today,
    step,
    switch_granularity,
)
from almanac.terminal.parse import parse_date
from almanac.view.grid import get_grid_metrics, round_down_to_quarter
from almanac.view.now_indicator import CurrentTimeIndicator
from almanac.view.views.calendar import render_navigation_state

BROWSE_PROMPT = (
    "[n]ext [p]rev [t]oday [d]ay [w]eek [m]onth [g]o YYYY-MM-DD "
    "toggle [N]otes [E]xpenses [I]ncome [H]ide-paid [q]uit"
)

DateOption = Annotated[
    Optional[pendulum.DateTime],
    typer.Option(
        "--date",
        parser=parse_date,
        help="Day to focus on (YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1)",
    ),
]
NoNotesOption = Annotated[
    bool, typer.Option("--no-notes", help="Hide note reminders")
]
NoExpensesOption = Annotated[
    bool, typer.Option("--no-expenses", help="Hide expense due dates")
]
NoIncomeOption = Annotated[bool, typer.Option("--no-income", help="Hide income entries")]
ShowCompletedOption = Annotated[
    bool, typer.Option("--show-completed", help="Show paid expenses")
]


def build_filters(
    no_notes: bool, no_expenses: bool, no_income: bool, show_completed: bool
) -> CalendarFilters:
    return {
        "show_notes": not no_notes,
        "show_expenses": not no_expenses,
        "show_income": not no_income,
        "hide_completed": not show_completed,
    }


def render_view(
    granularity: Granularity,
    date: Optional[pendulum.DateTime],
    filters: CalendarFilters,
    console: Optional[Console] = None,
) -> NavigationState:
    config = CONFIGURATION_REPO.get_config()
    state = switch_granularity(
        initial_state(config["calendar_default_view"], today=date), granularity
    )

    render_navigation_state(
        console if console is not None else Console(),
        state,
        load_calendar_events(filters),
        get_grid_metrics(config),
        round_down_to_quarter(pendulum.now("local")),
        describe_filters(filters),
    )
    return state


def day(
    date: DateOption = None,
    no_notes: NoNotesOption = False,
    no_expenses: NoExpensesOption = False,
    no_income: NoIncomeOption = False,
    show_completed: ShowCompletedOption = False,
) -> None:
    """Show the quarter-hour timeline for one day."""
    render_view(
        "day", date, build_filters(no_notes, no_expenses, no_income, show_completed)
    )


def week(
    date: DateOption = None,
    no_notes: NoNotesOption = False,
    no_expenses: NoExpensesOption = False,
    no_income: NoIncomeOption = False,
    show_completed: ShowCompletedOption = False,
) -> None:
    """Show the Monday-first week containing the focus day."""
    render_view(
        "week", date, build_filters(no_notes, no_expenses, no_income, show_completed)
    )


def month(
    date: DateOption = None,
    no_notes: NoNotesOption = False,
    no_expenses: NoExpensesOption = False,
    no_income: NoIncomeOption = False,
    show_completed: ShowCompletedOption = False,
) -> None:
    """Show the month grid containing the focus day."""
    render_view(
        "month", date, build_filters(no_notes, no_expenses, no_income, show_completed)
    )


def apply_browse_command(
    command: str, state: NavigationState, filters: CalendarFilters
) -> Optional[tuple[NavigationState, CalendarFilters]]:
    """
    Apply one interactive browse command.

    Returns the new (state, filters) pair, or None when the user quits.

    Raises:
        typer.BadParameter: If the command is not recognised
    """
    command = command.strip()
    if command in ("q", "quit"):
        return None

    # Filter toggles are upper case so they never collide with navigation
    if command in ("N", "E", "I", "H"):
        new_filters = filters.copy()
        if command == "N":
            new_filters["show_notes"] = not filters["show_notes"]
        elif command == "E":
            new_filters["show_expenses"] = not filters["show_expenses"]
        elif command == "I":
            new_filters["show_income"] = not filters["show_income"]
        else:
            new_filters["hide_completed"] = not filters["hide_completed"]
        return state, new_filters

    if command in ("n", "next"):
        return step(state, "next"), filters
    if command in ("p", "prev"):
        return step(state, "prev"), filters
    if command in ("t", "today"):
        return jump_to_today(state), filters
    if command in ("d", "day"):
        return switch_granularity(state, "day"), filters
    if command in ("w", "week"):
        return switch_granularity(state, "week"), filters
    if command in ("m", "month"):
        return switch_granularity(state, "month"), filters

    parts = command.split()
    if len(parts) == 2 and parts[0] in ("g", "go"):
        clicked_date = parse_date(parts[1])
        if clicked_date is not None:
            return drill_down(state, clicked_date), filters

    raise typer.BadParameter(f"Unknown command '{command}'")


class BrowseSession:
    """
    State of one interactive browse session.

    The session redraws the active view after every command and whenever the
    current-time indicator it is subscribed to reports a new quarter hour.
    Redraws from the timer thread and from the prompt loop are serialized.
    """

    def __init__(
        self,
        console: Console,
        state: NavigationState,
        filters: CalendarFilters,
        metrics: GridMetrics,
    ) -> None:
        self.console = console
        self.state = state
        self.filters = filters
        self.metrics = metrics
        self.events = load_calendar_events(filters)
        self.quarter_time: Optional[pendulum.DateTime] = None
        self.prompting = False
        self._lock = threading.RLock()

    def render(self) -> None:
        with self._lock:
            render_navigation_state(
                self.console,
                self.state,
                self.events,
                self.metrics,
                self.quarter_time,
                describe_filters(self.filters),
            )

    def on_quarter_time(self, quarter_time: pendulum.DateTime) -> None:
        with self._lock:
            self.quarter_time = quarter_time
            self.render()
            # The user is mid-prompt, show it again under the new view
            if self.prompting:
                self.console.print(f"{BROWSE_PROMPT}: ", end="", markup=False)

    def apply(self, command: str) -> bool:
        """Apply a browse command and redraw. Returns False when the user quits."""
        result = apply_browse_command(command, self.state, self.filters)
        if result is None:
            return False

        state, filters = result
        with self._lock:
            self.state = state
            if filters != self.filters:
                self.filters = filters
                self.events = load_calendar_events(filters)
            self.render()
        return True


def run_browse_session(
    session: BrowseSession, indicator: CurrentTimeIndicator
) -> None:
    with indicator:
        unsubscribe = indicator.subscribe(session.on_quarter_time)
        try:
            while True:
                session.prompting = True
                try:
                    command = typer.prompt(
                        BROWSE_PROMPT, default="q", show_default=False
                    )
                finally:
                    session.prompting = False
                try:
                    if not session.apply(command):
                        break
                except typer.BadParameter as e:
                    session.console.print(str(e), style="red", markup=False)
        finally:
            unsubscribe()


def browse(
    date: DateOption = None,
    no_notes: NoNotesOption = False,
    no_expenses: NoExpensesOption = False,
    no_income: NoIncomeOption = False,
    show_completed: ShowCompletedOption = False,
) -> None:
    """Navigate the calendar interactively, starting from the default view."""
    config = CONFIGURATION_REPO.get_config()

    session = BrowseSession(
        Console(),
        initial_state(config["calendar_default_view"], today=date),
        build_filters(no_notes, no_expenses, no_income, show_completed),
        get_grid_metrics(config),
    )
    run_browse_session(
        session, CurrentTimeIndicator(interval=config["now_refresh_seconds"])
    )
