# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from almanac.model.event_source import EventSourceName
from almanac.model.expense import Expense
from almanac.model.income import IncomeEntry
from almanac.model.note import Note


class CalendarEvent(TypedDict):
    id: str  # "<source>-<record id>-<YYYY-MM-DD>"
    source: EventSourceName
    title: str
    color: str
    date: pendulum.DateTime  # local midnight
    time: Optional[pendulum.DateTime]  # None for all-day events

    # Exactly one of these matches source, the others are None
    note: Optional[Note]
    expense: Optional[Expense]
    income: Optional[IncomeEntry]
