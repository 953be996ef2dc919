# SPDX-License-Identifier: MIT

from typing import Optional

from almanac.model.calendar_event import CalendarEvent
from almanac.model.calendar_filters import CalendarFilters
from almanac.repository.records import RECORD_REPO, RecordRepository
from almanac.service.aggregate import build_calendar_events


def load_calendar_events(
    filters: CalendarFilters, repository: Optional[RecordRepository] = None
) -> list[CalendarEvent]:
    """Run a full aggregation pass over the current store contents."""
    records = repository if repository is not None else RECORD_REPO
    return list(
        build_calendar_events(
            records.get_notes(),
            records.get_expenses(),
            records.get_income_entries(),
            records.get_category_colors(),
            filters,
        )
    )


def describe_filters(filters: CalendarFilters) -> Optional[str]:
    """Short description of the non-default filter state, or None when everything is shown."""
    hidden = [
        label
        for label, shown in (
            ("notes", filters["show_notes"]),
            ("expenses", filters["show_expenses"]),
            ("income", filters["show_income"]),
        )
        if not shown
    ]

    parts: list[str] = []
    if hidden:
        parts.append(f"hiding {', '.join(hidden)}")
    if not filters["hide_completed"]:
        parts.append("showing paid expenses")
    if not parts:
        return None
    return "; ".join(parts)
