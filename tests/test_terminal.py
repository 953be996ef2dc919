"""
Tests for the command line interface.
"""

import textwrap

import pytest
import typer
from conftest import local
from rich.console import Console
from typer.testing import CliRunner

from almanac.model.calendar_filters import get_default_filters
from almanac.repository.configuration import CONFIGURATION_REPO
from almanac.service.navigation import initial_state
from almanac.terminal import configuration as configuration_commands
from almanac.terminal.app import app
from almanac.terminal.calendar import (
    BROWSE_PROMPT,
    BrowseSession,
    apply_browse_command,
    build_filters,
)
from almanac.terminal.parse import parse_date, parse_granularity
from almanac.time import today_local
from almanac.view.now_indicator import CurrentTimeIndicator

runner = CliRunner()


@pytest.fixture
def notes_file(data_dir):
    (data_dir / "notes.yaml").write_text(
        textwrap.dedent(
            """
            notes:
              - id: n1
                title: Dentist
                reminder:
                  date_time: 2024-06-12T14:30:00
            """
        )
    )
    return data_dir / "notes.yaml"


def test_day_command(config_dir, notes_file, show_header):
    show_header(True)

    result = runner.invoke(app, ["day", "--date", "2024-06-12"])

    assert result.exit_code == 0, result.output
    assert "Wednesday, June 12, 2024" in result.output
    assert "Dentist" in result.output


def test_day_command_alias_and_hidden_notes(config_dir, notes_file, show_header):
    show_header(True)

    result = runner.invoke(app, ["d", "--date", "2024-06-12", "--no-notes"])

    assert result.exit_code == 0, result.output
    assert "Dentist" not in result.output
    assert "hiding notes" in result.output


def test_month_command(config_dir, notes_file, show_header):
    show_header(True)

    result = runner.invoke(app, ["month", "--date", "2024-06-12"])

    assert result.exit_code == 0, result.output
    assert "June 2024" in result.output


def test_invalid_date_is_rejected(config_dir, data_dir):
    result = runner.invoke(app, ["week", "--date", "someday"])

    assert result.exit_code != 0


def test_config_start_hour(config_dir):
    result = runner.invoke(app, ["config", "start-hour", "8"])

    assert result.exit_code == 0, result.output
    assert CONFIGURATION_REPO.get_config()["calendar_day_start_hour"] == 8


def test_config_start_hour_out_of_range(config_dir):
    result = runner.invoke(app, ["c", "sh", "30"])

    assert result.exit_code != 0
    assert CONFIGURATION_REPO.get_config()["calendar_day_start_hour"] == 6


def test_config_default_view(config_dir):
    result = runner.invoke(app, ["config", "default-view", "w"])

    assert result.exit_code == 0, result.output
    assert CONFIGURATION_REPO.get_config()["calendar_default_view"] == "week"


def test_browse_session(config_dir, notes_file, show_header):
    show_header(True)

    result = runner.invoke(
        app, ["browse", "--date", "2024-06-12"], input="w\nn\nbogus\nq\n"
    )

    assert result.exit_code == 0, result.output
    assert "June 2024" in result.output
    assert "June 10 – 16, 2024" in result.output
    assert "June 17 – 23, 2024" in result.output
    assert "Unknown command 'bogus'" in result.output


def test_browse_commands_navigate():
    state = initial_state("month", local(2024, 6, 12))
    filters = get_default_filters()

    state, filters = apply_browse_command("d", state, filters)
    assert state["anchor"] == local(2024, 6, 12)

    state, filters = apply_browse_command("n", state, filters)
    assert state["focus_day"] == local(2024, 6, 13)

    state, filters = apply_browse_command("g 2024-02-29", state, filters)
    assert state["granularity"] == "day"
    assert state["anchor"] == local(2024, 2, 29)

    state, filters = apply_browse_command("t", state, filters)
    assert state["focus_day"] == today_local()


def test_browse_commands_toggle_filters():
    state = initial_state("week", local(2024, 6, 12))
    filters = get_default_filters()

    new_state, new_filters = apply_browse_command("N", state, filters)
    assert new_state == state
    assert new_filters["show_notes"] is False
    assert filters["show_notes"] is True

    _, new_filters = apply_browse_command("H", state, new_filters)
    assert new_filters["hide_completed"] is False


def test_browse_quit_and_unknown():
    state = initial_state("week", local(2024, 6, 12))
    filters = get_default_filters()

    assert apply_browse_command("q", state, filters) is None
    with pytest.raises(typer.BadParameter):
        apply_browse_command("x", state, filters)


def test_build_filters():
    assert build_filters(True, False, False, True) == {
        "show_notes": False,
        "show_expenses": True,
        "show_income": True,
        "hide_completed": False,
    }


@pytest.mark.parametrize(
    "value,offset",
    [("today", 0), ("t", 0), ("y", -1), ("tomorrow", 1), ("-7", -7), ("3", 3)],
)
def test_parse_relative_dates(value, offset):
    assert parse_date(value) == today_local().add(days=offset)


def test_parse_date():
    assert parse_date("2024-02-29") == local(2024, 2, 29)
    assert parse_date(None) is None
    with pytest.raises(typer.BadParameter):
        parse_date("2024-02-30")
    with pytest.raises(typer.BadParameter):
        parse_date("next week")


def test_parse_granularity():
    assert parse_granularity("Week") == "week"
    assert parse_granularity("m") == "month"
    with pytest.raises(typer.BadParameter):
        parse_granularity("year")


def test_quarter_hour_px_help_explains_terminal_layout(config_dir):
    group = typer.main.get_command(configuration_commands.app)
    help_text = group.commands["quarter-hour-px, qp"].help

    assert "one line per quarter hour" in help_text

    result = runner.invoke(app, ["config", "qp", "--help"])
    assert result.exit_code == 0, result.output


class TestBrowseSession:
    @pytest.fixture
    def console(self) -> Console:
        return Console(record=True, width=200, color_system=None)

    @pytest.fixture
    def session(self, data_dir, show_header, console) -> BrowseSession:
        show_header(True)
        return BrowseSession(
            console,
            initial_state("day", local(2024, 6, 12)),
            get_default_filters(),
            {"quarter_hour_px": 16, "start_hour": 6},
        )

    @pytest.fixture
    def clock(self):
        class Clock:
            now = local(2024, 6, 12, 9, 40)

            def __call__(self):
                return self.now

        return Clock()

    def test_redraws_when_quarter_hour_changes(self, session, console, clock):
        indicator = CurrentTimeIndicator(clock=clock, interval=60)
        indicator.subscribe(session.on_quarter_time)

        first = console.export_text()
        assert "Wednesday, June 12, 2024" in first
        assert "09:30 │" in first

        clock.now = local(2024, 6, 12, 10, 50)
        assert indicator.tick() is True

        second = console.export_text()
        assert "Wednesday, June 12, 2024" in second
        assert "10:45 │" in second
        assert "09:30" not in second

    def test_same_quarter_hour_does_not_redraw(self, session, console, clock):
        indicator = CurrentTimeIndicator(clock=clock, interval=60)
        indicator.subscribe(session.on_quarter_time)
        console.export_text()

        clock.now = local(2024, 6, 12, 9, 44)
        assert indicator.tick() is False

        assert console.export_text() == ""

    def test_prompt_is_repeated_after_redraw(self, session, console, clock):
        indicator = CurrentTimeIndicator(clock=clock, interval=60)
        indicator.subscribe(session.on_quarter_time)
        console.export_text()

        session.prompting = True
        clock.now = local(2024, 6, 12, 10, 0)
        indicator.tick()

        assert f"{BROWSE_PROMPT}: " in console.export_text()

    def test_commands_redraw_with_latest_quarter_time(self, session, console, clock):
        indicator = CurrentTimeIndicator(clock=clock, interval=60)
        indicator.subscribe(session.on_quarter_time)
        console.export_text()

        assert session.apply("w") is True
        output = console.export_text()
        assert "June 10 – 16, 2024" in output
        assert "09:30 │" in output

        assert session.apply("N") is True
        assert session.filters["show_notes"] is False
        assert "hiding notes" in console.export_text()

        assert session.apply("q") is False
