# SPDX-License-Identifier: MIT

from typing import Literal

EventSourceName = Literal["note", "expense", "income"]


class EventSource:
    NOTE = "note"
    EXPENSE = "expense"
    INCOME = "income"
