# SPDX-License-Identifier: MIT

from typing import Any, NotRequired, Optional, TypedDict


class Expense(TypedDict):
    id: str
    name: str
    amount: float
    category: str
    due_date: Any  # Optional date value, one record per materialized occurrence
    is_paid: bool
    is_recurring: bool
    is_archived: NotRequired[bool]
    parent_expense_id: NotRequired[Optional[str]]
