# SPDX-License-Identifier: MIT

from typing import TypedDict


class CalendarFilters(TypedDict):
    show_notes: bool
    show_expenses: bool
    show_income: bool
    hide_completed: bool  # hides paid expenses


def get_default_filters() -> CalendarFilters:
    return {
        "show_notes": True,
        "show_expenses": True,
        "show_income": True,
        "hide_completed": True,
    }
