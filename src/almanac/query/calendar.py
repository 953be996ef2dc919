# SPDX-License-Identifier: MIT

from typing import Iterable, TypedDict

import pendulum

from almanac.model.calendar_event import CalendarEvent
from almanac.time import datetime_to_local_date_str, midnight


class SplitEvents(TypedDict):
    all_day: list[CalendarEvent]
    timed: list[CalendarEvent]


def events_on_date(
    events: Iterable[CalendarEvent], date: pendulum.DateTime
) -> list[CalendarEvent]:
    """
    Filter events to those on the same local calendar day as `date`.

    Both sides are compared at local midnight, never as UTC days.
    """
    target = midnight(date)
    return [event for event in events if midnight(event["date"]) == target]


def split_events_by_time(events: Iterable[CalendarEvent]) -> SplitEvents:
    """Partition events into all-day and timed, keeping their relative order."""
    all_day: list[CalendarEvent] = []
    timed: list[CalendarEvent] = []

    for event in events:
        if event["time"] is None:
            all_day.append(event)
        else:
            timed.append(event)

    return {"all_day": all_day, "timed": timed}


def events_in_range(
    events: Iterable[CalendarEvent],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> list[CalendarEvent]:
    """Filter events whose day lies within the closed local-day range [start, end]."""
    range_start = midnight(start)
    range_end = midnight(end)
    return [
        event
        for event in events
        if range_start <= midnight(event["date"]) <= range_end
    ]


def events_by_date(
    events: Iterable[CalendarEvent],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> dict[str, list[CalendarEvent]]:
    """
    Group events by local date string within the closed range [start, end].

    Args:
        events: Events to group
        start: First day of the range
        end: Last day of the range (inclusive)

    Returns:
        Dictionary mapping 'YYYY-MM-DD' strings to the events on that day,
        in the order they were received
    """
    events_by_day: dict[str, list[CalendarEvent]] = {}
    for event in events_in_range(events, start, end):
        date_key = datetime_to_local_date_str(event["date"])
        events_by_day.setdefault(date_key, []).append(event)
    return events_by_day
