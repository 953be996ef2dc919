# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from almanac import configuration
from almanac.model.expense import Expense
from almanac.model.income import IncomeEntry
from almanac.model.note import Note

logger = logging.getLogger(__name__)


class RecordRepository:
    """
    Read-only view over the note, expense and income stores.

    The stores own their files; this repository only loads them so the
    calendar can project them. Date fields are passed through as loaded and
    are normalized (or skipped) by the aggregator.
    """

    def __init__(self) -> None:
        self._notes: Optional[list[Note]] = None
        self._expenses: Optional[list[Expense]] = None
        self._category_colors: Optional[dict[str, str]] = None
        self._income_entries: Optional[list[IncomeEntry]] = None

    @property
    def notes(self) -> list[Note]:
        if self._notes is None:
            self._notes = cast(
                list[Note],
                self.__load_list(configuration.DATA_NOTES_PATH, "notes"),
            )
        return self._notes

    @property
    def expenses(self) -> list[Expense]:
        if self._expenses is None:
            self.__load_expenses()
        if self._expenses is None:
            raise ValueError()
        return self._expenses

    @property
    def category_colors(self) -> dict[str, str]:
        if self._category_colors is None:
            self.__load_expenses()
        if self._category_colors is None:
            raise ValueError()
        return self._category_colors

    @property
    def income_entries(self) -> list[IncomeEntry]:
        if self._income_entries is None:
            self._income_entries = cast(
                list[IncomeEntry],
                self.__load_list(configuration.DATA_INCOME_PATH, "income"),
            )
        return self._income_entries

    def __load_expenses(self) -> None:
        data = self.__load_file(configuration.DATA_EXPENSES_PATH)
        self._expenses = cast(list[Expense], self.__records(data, "expenses"))
        colors = data.get("category_colors")
        if isinstance(colors, dict):
            self._category_colors = {
                str(category): str(color) for category, color in colors.items()
            }
        else:
            self._category_colors = {}

    def __load_list(self, path: Path, key: str) -> list[dict[str, Any]]:
        return self.__records(self.__load_file(path), key)

    def __records(self, data: dict[str, Any], key: str) -> list[dict[str, Any]]:
        records = data.get(key)
        if not isinstance(records, list):
            return []
        return [record for record in records if isinstance(record, dict)]

    def __load_file(self, path: Path) -> dict[str, Any]:
        if not path.is_file():
            return {}
        try:
            data = load(path.read_text(), Loader=Loader)
        except YAMLError:
            logger.warning("Could not parse %s, treating it as empty", path)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def get_notes(self) -> list[Note]:
        return deepcopy(self.notes)

    def get_expenses(self) -> list[Expense]:
        return deepcopy(self.expenses)

    def get_category_colors(self) -> dict[str, str]:
        return deepcopy(self.category_colors)

    def get_income_entries(self) -> list[IncomeEntry]:
        return deepcopy(self.income_entries)

    def reset(self) -> None:
        self._notes = None
        self._expenses = None
        self._category_colors = None
        self._income_entries = None


RECORD_REPO = RecordRepository()
