# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from almanac.model.navigation import GRANULARITIES, Granularity
from almanac.time import datetime_from_local_date_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Parse a calendar date option into local midnight.

    Accepts YYYY-MM-DD, today/t, yesterday/y, tomorrow/o or a signed day
    offset such as 1 or -7.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return datetime_from_local_date_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date}': {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today_local().add(days=int(date)).start_of("day")

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1).start_of("day")
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1).start_of("day")
    raise typer.BadParameter(
        f"Incorrect date format '{date}' (use YYYY-MM-DD, today, yesterday, tomorrow or a day offset)"
    )


def parse_granularity(granularity: str) -> Granularity:
    value = granularity.strip().lower()
    for option in GRANULARITIES:
        if value == option or value == option[0]:
            return option
    raise typer.BadParameter(
        f"View must be one of {', '.join(GRANULARITIES)}, got '{granularity}'"
    )
