# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Any, Optional, cast

import pendulum

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.DateTime:
    return now_local().start_of("day")


def python_to_pendulum_local(python_value: datetime.datetime) -> pendulum.DateTime:
    if python_value.tzinfo is None:
        return pendulum.instance(python_value, tz="local")
    return pendulum.instance(python_value).in_tz("local")


def midnight(datetime: pendulum.DateTime) -> pendulum.DateTime:
    """Local midnight of the day `datetime` falls on."""
    return datetime.in_tz("local").start_of("day")


def same_local_day(left: pendulum.DateTime, right: pendulum.DateTime) -> bool:
    return midnight(left) == midnight(right)


def datetime_to_local_date_str(datetime: pendulum.DateTime) -> str:
    """Convert a pendulum.DateTime to a local date string in 'YYYY-MM-DD' format."""
    return datetime.in_tz("local").format("YYYY-MM-DD")


def datetime_to_display_local_time_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("HH:mm")


def datetime_from_local_date_str(date_str: str) -> pendulum.DateTime:
    """Parse a local date string in 'YYYY-MM-DD' format to a pendulum.DateTime at midnight local time."""
    return cast(pendulum.DateTime, pendulum.parse(date_str, tz="local")).start_of("day")


def datetime_from_str_local(datetime: str) -> pendulum.DateTime:
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime, tz="local"))
    return pendulum_date_time.in_tz("local")


def coerce_datetime(value: Any) -> Optional[tuple[pendulum.DateTime, bool]]:
    """
    Normalize a loosely typed date value into a local pendulum.DateTime.

    Accepts pendulum/python datetimes, python dates and ISO strings. Returns a
    tuple of (local datetime, has_time) where has_time is False for date-only
    values, or None when the value is missing, out of range or cannot be
    parsed.
    """
    if value is None:
        return None

    try:
        if isinstance(value, datetime.datetime):
            return python_to_pendulum_local(value), True

        if isinstance(value, datetime.date):
            return (
                pendulum.datetime(value.year, value.month, value.day, tz="local"),
                False,
            )

        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if DATE_ONLY_PATTERN.match(text):
                return datetime_from_local_date_str(text), False
            return datetime_from_str_local(text), True
    except (ValueError, TypeError, OverflowError):
        return None

    return None
