# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class IncomeEntry(TypedDict):
    id: str
    date: str  # YYYY-MM-DD
    amount: float
    hours: NotRequired[Optional[int]]
    minutes: NotRequired[Optional[int]]
