"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import Any, Optional

import pendulum
import pytest

from almanac import configuration
from almanac.model.calendar_event import CalendarEvent
from almanac.model.calendar_filters import CalendarFilters, get_default_filters
from almanac.repository.configuration import CONFIGURATION_REPO
from almanac.repository.records import RECORD_REPO
from almanac.view.views.header import get_show_header, set_show_header


def local(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> pendulum.DateTime:
    return pendulum.datetime(year, month, day, hour, minute, second, tz="local")


def make_event(
    event_id: str,
    date: pendulum.DateTime,
    time: Optional[pendulum.DateTime] = None,
    title: Optional[str] = None,
) -> CalendarEvent:
    return {
        "id": event_id,
        "source": "note",
        "title": title if title is not None else event_id,
        "color": "#0ea5e9",
        "date": date.start_of("day"),
        "time": time,
        "note": {"id": event_id, "title": event_id},
        "expense": None,
        "income": None,
    }


@pytest.fixture
def filters() -> CalendarFilters:
    """Default filters: every source shown, paid expenses hidden."""
    return get_default_filters()


@pytest.fixture
def sample_notes() -> list[dict[str, Any]]:
    return [
        {
            "id": "n1",
            "title": "Dentist",
            "content": "Bring insurance card",
            "tags": ["health"],
            "reminder": {"date_time": local(2024, 6, 12, 14, 30), "notifications": []},
        },
        {
            "id": "n2",
            "title": "",
            "reminder": {"date_time": "2024-06-13"},
        },
        {"id": "n3", "title": "No reminder"},
    ]


@pytest.fixture
def sample_expenses() -> list[dict[str, Any]]:
    return [
        {
            "id": "e1",
            "name": "Rent",
            "amount": 1200.0,
            "category": "Housing",
            "due_date": local(2024, 6, 1),
            "is_paid": True,
            "is_recurring": True,
            "parent_expense_id": "rent",
        },
        {
            "id": "e2",
            "name": "Internet",
            "amount": 45.0,
            "category": "Utilities",
            "due_date": local(2024, 6, 12),
            "is_paid": False,
            "is_recurring": True,
            "parent_expense_id": "internet",
        },
        {
            "id": "e3",
            "name": "Concert",
            "amount": 80.0,
            "category": "Fun",
            "due_date": local(2024, 6, 20),
            "is_paid": False,
            "is_recurring": False,
        },
    ]


@pytest.fixture
def sample_income() -> list[dict[str, Any]]:
    return [
        {"id": "i1", "date": "2024-06-12", "amount": 12.5, "hours": 1, "minutes": 30},
        {"id": "i2", "date": "2024-06-14", "amount": 200},
    ]


@pytest.fixture
def category_colors() -> dict[str, str]:
    return {"Housing": "#6366f1", "Utilities": "#f59e0b"}


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configuration file at a temporary directory."""
    config_path = tmp_path / "config"
    config_path.mkdir()
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    CONFIGURATION_REPO.reset()
    yield config_path
    CONFIGURATION_REPO.reset()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the note, expense and income stores at a temporary directory."""
    data_path = tmp_path / "data"
    data_path.mkdir()
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_NOTES_PATH", data_path / "notes.yaml")
    monkeypatch.setattr(
        configuration, "DATA_EXPENSES_PATH", data_path / "expenses.yaml"
    )
    monkeypatch.setattr(configuration, "DATA_INCOME_PATH", data_path / "income.yaml")
    RECORD_REPO.reset()
    yield data_path
    RECORD_REPO.reset()


@pytest.fixture
def show_header():
    """Restore header visibility after a test changes it."""
    previous = get_show_header()
    yield set_show_header
    set_show_header(previous)


@pytest.fixture
def new_york():
    """Run with America/New_York as the local timezone (DST on 2024-03-10 and 2024-11-03)."""
    with pendulum.test_local_timezone(pendulum.timezone("America/New_York")):
        yield
