# SPDX-License-Identifier: MIT

"""
Calendar navigation.

Representative date ("anchor") per granularity:
    day   -> the day itself (local midnight)
    week  -> Monday of that week (local midnight)
    month -> 1st of that month (local midnight)

The focus day is the concrete day the user is looking at. Switching
granularity keeps it and re-derives the anchor, so Day -> Week -> Day lands
back on the same day. Stepping moves the anchor by one unit and drags the
focus day along with it.
"""

from typing import Optional

import pendulum

from almanac.model.navigation import Direction, Granularity, NavigationState
from almanac.time import midnight, now_local


def monday_of(date: pendulum.DateTime) -> pendulum.DateTime:
    """Monday on or before `date`. Independent of pendulum's week_starts_at setting."""
    day = midnight(date)
    return day.subtract(days=day.weekday()).start_of("day")


def first_of_month(date: pendulum.DateTime) -> pendulum.DateTime:
    return midnight(date).start_of("month")


def anchor_for(granularity: Granularity, day: pendulum.DateTime) -> pendulum.DateTime:
    if granularity == "day":
        return midnight(day)
    if granularity == "week":
        return monday_of(day)
    if granularity == "month":
        return first_of_month(day)
    raise ValueError(f"Unknown granularity: {granularity}")


def initial_state(
    default_view: Granularity, today: Optional[pendulum.DateTime] = None
) -> NavigationState:
    focus_day = midnight(today if today is not None else now_local())
    return {
        "focus_day": focus_day,
        "granularity": default_view,
        "anchor": anchor_for(default_view, focus_day),
    }


def switch_granularity(
    state: NavigationState, granularity: Granularity
) -> NavigationState:
    return {
        "focus_day": state["focus_day"],
        "granularity": granularity,
        "anchor": anchor_for(granularity, state["focus_day"]),
    }


def step_anchor(
    granularity: Granularity, anchor: pendulum.DateTime, direction: Direction
) -> pendulum.DateTime:
    """
    Move an anchor one unit of `granularity` forwards or backwards.

    Month steps use calendar-aware arithmetic, and month anchors are always
    the 1st, so a step never overflows into the following month.
    """
    delta = 1 if direction == "next" else -1
    if granularity == "day":
        return anchor.add(days=delta)
    if granularity == "week":
        return anchor.add(weeks=delta)
    if granularity == "month":
        return anchor.add(months=delta)
    raise ValueError(f"Unknown granularity: {granularity}")


def apply_anchor(
    state: NavigationState, new_anchor: pendulum.DateTime
) -> NavigationState:
    """
    Publish an anchor computed by the navigation bar.

    The anchor is already representative for the active granularity, so it
    is not re-derived; the focus day follows it.
    """
    return {
        "focus_day": midnight(new_anchor),
        "granularity": state["granularity"],
        "anchor": new_anchor,
    }


def step(state: NavigationState, direction: Direction) -> NavigationState:
    return apply_anchor(
        state, step_anchor(state["granularity"], state["anchor"], direction)
    )


def jump_to_today(
    state: NavigationState, now: Optional[pendulum.DateTime] = None
) -> NavigationState:
    anchor = anchor_for(state["granularity"], now if now is not None else now_local())
    return {
        "focus_day": anchor,
        "granularity": state["granularity"],
        "anchor": anchor,
    }


def drill_down(
    state: NavigationState, clicked_date: pendulum.DateTime
) -> NavigationState:
    focus_day = midnight(clicked_date)
    return {
        "focus_day": focus_day,
        "granularity": "day",
        "anchor": focus_day,
    }


def week_days(anchor: pendulum.DateTime) -> list[pendulum.DateTime]:
    week_start = monday_of(anchor)
    return [week_start.add(days=offset) for offset in range(7)]


def month_grid_days(anchor: pendulum.DateTime) -> list[list[pendulum.DateTime]]:
    """Six Monday-first weeks covering the month that contains `anchor`."""
    grid_start = monday_of(first_of_month(anchor))
    return [
        [grid_start.add(days=week * 7 + day) for day in range(7)] for week in range(6)
    ]


def heading_text(granularity: Granularity, anchor: pendulum.DateTime) -> str:
    if granularity == "day":
        return anchor.format("dddd, MMMM D, YYYY")
    if granularity == "week":
        end = anchor.add(days=6)
        if anchor.month == end.month:
            return f"{anchor.format('MMMM D')} – {end.format('D, YYYY')}"
        return f"{anchor.format('MMM D')} – {end.format('MMM D, YYYY')}"
    if granularity == "month":
        return anchor.format("MMMM YYYY")
    raise ValueError(f"Unknown granularity: {granularity}")
