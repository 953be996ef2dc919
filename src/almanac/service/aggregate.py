# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Iterable, Iterator, Optional

import pendulum

from almanac.color import INCOME_COLOR, NOTE_COLOR, resolve_expense_color
from almanac.model.calendar_event import CalendarEvent
from almanac.model.calendar_filters import CalendarFilters
from almanac.model.event_source import EventSource
from almanac.model.expense import Expense
from almanac.model.income import IncomeEntry
from almanac.model.note import Note
from almanac.time import coerce_datetime, datetime_to_local_date_str, midnight

logger = logging.getLogger(__name__)

UNTITLED_NOTE = "Untitled note"


def _event_id(source: str, record_id: object, date: pendulum.DateTime) -> str:
    return f"{source}-{record_id}-{datetime_to_local_date_str(date)}"


def note_to_event(note: Note) -> Optional[CalendarEvent]:
    """
    Project a note onto the calendar.

    A note produces an event only when it carries a reminder with a usable
    date. Reminders with a time of day become timed events; date-only
    reminders become all-day events.
    """
    if not isinstance(note, dict):
        logger.debug("Skipping note: not a record (%r)", note)
        return None
    if note.get("archived", False):
        return None

    reminder = note.get("reminder")
    if not isinstance(reminder, dict):
        return None

    moment = coerce_datetime(reminder.get("date_time"))
    if moment is None:
        logger.debug("Skipping note %s: reminder has no usable date", note.get("id"))
        return None

    reminder_at, has_time = moment
    date = midnight(reminder_at)
    return {
        "id": _event_id(EventSource.NOTE, note.get("id"), date),
        "source": "note",
        "title": note.get("title") or UNTITLED_NOTE,
        "color": NOTE_COLOR,
        "date": date,
        "time": reminder_at if has_time else None,
        "note": deepcopy(note),
        "expense": None,
        "income": None,
    }


def expense_to_event(
    expense: Expense, category_colors: dict[str, str], hide_completed: bool
) -> Optional[CalendarEvent]:
    """
    Project one expense occurrence onto the calendar as an all-day event.

    Parent recurring expenses are skipped, their materialized occurrences
    carry the actual due dates.
    """
    if not isinstance(expense, dict):
        logger.debug("Skipping expense: not a record (%r)", expense)
        return None
    if expense.get("is_archived", False):
        return None
    if hide_completed and expense.get("is_paid", False):
        return None
    if expense.get("is_recurring", False) and not expense.get("parent_expense_id"):
        return None

    moment = coerce_datetime(expense.get("due_date"))
    if moment is None:
        logger.debug("Skipping expense %s: no usable due date", expense.get("id"))
        return None

    date = midnight(moment[0])
    return {
        "id": _event_id(EventSource.EXPENSE, expense.get("id"), date),
        "source": "expense",
        "title": str(expense.get("name") or ""),
        "color": resolve_expense_color(
            str(expense.get("category") or ""), category_colors
        ),
        "date": date,
        "time": None,
        "note": None,
        "expense": deepcopy(expense),
        "income": None,
    }


def income_to_event(entry: IncomeEntry) -> Optional[CalendarEvent]:
    if not isinstance(entry, dict):
        logger.debug("Skipping income entry: not a record (%r)", entry)
        return None

    moment = coerce_datetime(entry.get("date"))
    if moment is None:
        logger.debug("Skipping income entry %s: no usable date", entry.get("id"))
        return None

    try:
        amount = float(entry.get("amount", 0))
    except (TypeError, ValueError):
        logger.debug("Skipping income entry %s: invalid amount", entry.get("id"))
        return None

    date = midnight(moment[0])
    return {
        "id": _event_id(EventSource.INCOME, entry.get("id"), date),
        "source": "income",
        "title": f"Income: ${amount:.2f}",
        "color": INCOME_COLOR,
        "date": date,
        "time": None,
        "note": None,
        "expense": None,
        "income": deepcopy(entry),
    }


def build_calendar_events(
    notes: Iterable[Note],
    expenses: Iterable[Expense],
    income_entries: Iterable[IncomeEntry],
    category_colors: dict[str, str],
    filters: CalendarFilters,
) -> Iterator[CalendarEvent]:
    """
    Normalize notes, expenses and income entries into calendar events.

    Sources switched off in `filters` produce nothing. Records without a
    usable date are skipped rather than failing the whole pass. The result is
    lazy: wrap it in list() to traverse it more than once.

    Args:
        notes: Notes, only those with reminders are projected
        expenses: Expense occurrences, one record per due date
        income_entries: Income entries
        category_colors: Mapping from expense category to display color
        filters: Source toggles and the hide-completed flag

    Yields:
        One CalendarEvent per projected record
    """
    if filters["show_notes"]:
        for note in notes:
            note_event = note_to_event(note)
            if note_event is not None:
                yield note_event

    if filters["show_expenses"]:
        for expense in expenses:
            expense_event = expense_to_event(
                expense, category_colors, filters["hide_completed"]
            )
            if expense_event is not None:
                yield expense_event

    if filters["show_income"]:
        for entry in income_entries:
            income_event = income_to_event(entry)
            if income_event is not None:
                yield income_event
