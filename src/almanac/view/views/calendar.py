# SPDX-License-Identifier: MIT

from typing import Any, Iterable, Optional

import pendulum
from rich import box
from rich.columns import Columns
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from almanac.color import (
    DETAIL_STYLE,
    NOW_LINE_STYLE,
    OUTSIDE_MONTH_STYLE,
    PAID_BADGE_STYLE,
    RECURRING_BADGE_STYLE,
    SEPARATOR_STYLE,
    TODAY_STYLE,
)
from almanac.model.calendar_event import CalendarEvent
from almanac.model.grid_metrics import GridMetrics
from almanac.model.navigation import NavigationState
from almanac.query.calendar import (
    events_by_date,
    events_in_range,
    events_on_date,
    split_events_by_time,
)
from almanac.service.navigation import heading_text, month_grid_days, week_days
from almanac.time import (
    datetime_to_display_local_time_str,
    datetime_to_local_date_str,
    midnight,
    same_local_day,
    today_local,
)
from almanac.view.grid import hour_rows, slot_at
from almanac.view.views.header import header

MAX_VISIBLE_MONTH_CHIPS = 3
MAX_NOTE_TAGS = 3
NOTE_SNIPPET_LENGTH = 60
DAY_HEADERS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Width of the "HH:mm " label in front of every timeline row
TIME_GUTTER_WIDTH = 6


def render_navigation_state(
    console: Console,
    state: NavigationState,
    events: list[CalendarEvent],
    metrics: GridMetrics,
    quarter_time: Optional[pendulum.DateTime] = None,
    sub_header: Optional[str] = None,
) -> None:
    """Render the view selected by `state` at its anchor."""
    if state["granularity"] == "day":
        calendar_day_view(
            console, state["anchor"], events, metrics, quarter_time, sub_header
        )
    elif state["granularity"] == "week":
        calendar_week_view(
            console,
            state["anchor"],
            events,
            metrics,
            quarter_time,
            sub_header=sub_header,
        )
    else:
        calendar_month_view(console, state["anchor"], events, sub_header=sub_header)


def calendar_day_view(
    console: Console,
    date: pendulum.DateTime,
    events: list[CalendarEvent],
    metrics: GridMetrics,
    quarter_time: Optional[pendulum.DateTime] = None,
    sub_header: Optional[str] = None,
) -> None:
    """
    Display a vertical quarter-hour timeline for a single day.

    All-day events are listed above the timeline. Every event is followed by
    its source details: note snippet and tags, expense amount and badges, or
    income amount and hours worked.

    Args:
        console: Console to print to
        date: The day to display
        events: Aggregated calendar events (any days)
        metrics: Time grid metrics shared with the week view
        quarter_time: Current time rounded to the quarter hour, draws the "now" row
        sub_header: Optional text printed under the heading
    """
    day = midnight(date)
    header(console, heading_text("day", day), sub_header)

    split = split_events_by_time(events_on_date(events, day))

    console.print()
    if split["all_day"]:
        for event in split["all_day"]:
            for line in _all_day_lines(event):
                console.print(line)
        console.print(Text("─" * 40, style=SEPARATOR_STYLE))

    now_slot = _now_slot(day, quarter_time, metrics)
    slots = _timeline_slots(split["timed"], metrics, now_slot)
    for line in _render_timeline(day, split["timed"], metrics, slots, quarter_time):
        console.print(line)
    console.print()


def calendar_week_view(
    console: Console,
    anchor: pendulum.DateTime,
    events: list[CalendarEvent],
    metrics: GridMetrics,
    quarter_time: Optional[pendulum.DateTime] = None,
    day_width: int = 30,
    sub_header: Optional[str] = None,
) -> None:
    """
    Display seven day columns, Monday first, side by side.

    Every column renders the same set of timeline rows, padded to the same
    number of detail lines, so that an event at a given clock time sits on
    the same line in every column and on the same row it would occupy in the
    day view.

    Args:
        console: Console to print to
        anchor: Any day of the week to display (normally its Monday)
        events: Aggregated calendar events (any days)
        metrics: Time grid metrics shared with the day view
        quarter_time: Current time rounded to the quarter hour, draws the "now" row
        day_width: Width of each day column in characters
        sub_header: Optional text printed under the heading
    """
    days = week_days(anchor)
    header(console, heading_text("week", days[0]), sub_header)

    week_events = events_in_range(events, days[0], days[-1])
    split_by_day = [
        split_events_by_time(events_on_date(week_events, day)) for day in days
    ]
    content_width = day_width - 4

    # Share one row layout across the week
    all_timed = [event for split in split_by_day for event in split["timed"]]
    now_slot: Optional[int] = None
    for day in days:
        now_slot = _now_slot(day, quarter_time, metrics)
        if now_slot is not None:
            break
    slots = _timeline_slots(all_timed, metrics, now_slot)

    detail_rows: dict[int, int] = {}
    for split in split_by_day:
        for slot, count in _detail_rows(split["timed"], metrics).items():
            detail_rows[slot] = max(detail_rows.get(slot, 0), count)

    all_day_blocks = [
        [
            line
            for event in split["all_day"]
            for line in _all_day_lines(event, content_width)
        ]
        for split in split_by_day
    ]
    all_day_rows = max(len(block) for block in all_day_blocks)

    day_columns: list[RenderableType] = []
    for day, split, all_day_block in zip(days, split_by_day, all_day_blocks):
        content_lines: list[Text] = []

        if all_day_rows:
            content_lines.extend(all_day_block)
            content_lines.extend(
                Text("") for _ in range(all_day_rows - len(all_day_block))
            )
            content_lines.append(Text("─" * content_width, style=SEPARATOR_STYLE))

        content_lines.extend(
            _render_timeline(
                day,
                split["timed"],
                metrics,
                slots,
                quarter_time,
                content_width,
                detail_rows,
            )
        )

        title_style = TODAY_STYLE if same_local_day(day, today_local()) else "bold"
        day_columns.append(
            Panel(
                Text("\n").join(content_lines),
                title=Text(day.format("ddd D"), style=title_style),
                width=day_width,
                border_style="bright_black",
                padding=(0, 1),
            )
        )

    console.print()
    console.print(Columns(day_columns, equal=False, expand=False, padding=(0, 0)))
    console.print()


def calendar_month_view(
    console: Console,
    anchor: pendulum.DateTime,
    events: list[CalendarEvent],
    cell_width: int = 16,
    sub_header: Optional[str] = None,
) -> None:
    """
    Display a six-week, Monday-first month grid.

    Each cell lists up to three compact events, then a "+N more" marker. Days
    that belong to the neighbouring months are dimmed.

    Args:
        console: Console to print to
        anchor: Any day of the month to display (normally the 1st)
        events: Aggregated calendar events (any days)
        cell_width: Width of each day cell in characters
        sub_header: Optional text printed under the heading
    """
    month_start = midnight(anchor).start_of("month")
    header(console, heading_text("month", month_start), sub_header)

    weeks = month_grid_days(month_start)
    grouped = events_by_date(events, weeks[0][0], weeks[-1][-1])
    today = today_local()

    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    for day_name in DAY_HEADERS:
        table.add_column(day_name, style="bold", width=cell_width)

    for week in weeks:
        cells: list[RenderableType] = []
        for day in week:
            in_month = day.month == month_start.month
            cells.append(
                _render_month_cell(
                    day,
                    grouped.get(datetime_to_local_date_str(day), []),
                    in_month,
                    same_local_day(day, today),
                    cell_width,
                )
            )
        table.add_row(*cells)

    console.print()
    console.print(table)
    console.print()


def _render_month_cell(
    day: pendulum.DateTime,
    day_events: list[CalendarEvent],
    in_month: bool,
    is_today: bool,
    cell_width: int,
) -> Text:
    if is_today:
        day_style = TODAY_STYLE
    elif in_month:
        day_style = "bold"
    else:
        day_style = OUTSIDE_MONTH_STYLE

    cell = Text()
    cell.append(f"{day.day:>2}", style=day_style)

    for event in day_events[:MAX_VISIBLE_MONTH_CHIPS]:
        cell.append("\n")
        chip = _event_chip(event, cell_width)
        if not in_month:
            chip.stylize(OUTSIDE_MONTH_STYLE)
        cell.append_text(chip)

    hidden = len(day_events) - MAX_VISIBLE_MONTH_CHIPS
    if hidden > 0:
        cell.append(f"\n+{hidden} more", style="dim")

    return cell


def _event_chip(event: CalendarEvent, max_width: Optional[int] = None) -> Text:
    title = event["title"]
    if event["time"] is not None:
        title = f"{datetime_to_display_local_time_str(event['time'])} {title}"

    # Leave room for the square and the space after it
    if max_width is not None:
        title = _truncate(title, max_width - 2)

    chip = Text()
    chip.append("■ ", style=event["color"])
    chip.append(title, style=event["color"])
    return chip


def _event_details(event: CalendarEvent) -> list[Text]:
    """Source-specific detail lines shown under an event in the day and week views."""
    details: list[Text] = []

    note = event["note"]
    expense = event["expense"]
    income = event["income"]

    if event["source"] == "note" and note is not None:
        content = " ".join(str(note.get("content") or "").split())
        if content:
            details.append(Text(content[:NOTE_SNIPPET_LENGTH], style=DETAIL_STYLE))
        tags = note.get("tags")
        if isinstance(tags, list) and tags:
            details.append(
                Text(
                    " ".join(f"#{tag}" for tag in tags[:MAX_NOTE_TAGS]),
                    style=event["color"],
                )
            )
    elif event["source"] == "expense" and expense is not None:
        line = Text(_format_amount(expense.get("amount")), style="bold")
        if expense.get("is_recurring", False):
            line.append(" ")
            line.append("Recurring", style=RECURRING_BADGE_STYLE)
        if expense.get("is_paid", False):
            line.append(" ")
            line.append("Paid", style=PAID_BADGE_STYLE)
        if expense.get("category"):
            line.append(f" {expense['category']}", style=DETAIL_STYLE)
        details.append(line)
    elif event["source"] == "income" and income is not None:
        line = Text(_format_amount(income.get("amount")), style="bold")
        hours = income.get("hours") or 0
        minutes = income.get("minutes") or 0
        if hours or minutes:
            line.append(f" {hours}h {minutes}m", style=DETAIL_STYLE)
        details.append(line)

    return details


def _format_amount(amount: Any) -> str:
    try:
        return f"${float(amount):,.2f}"
    except (TypeError, ValueError):
        return "$-"


def _all_day_lines(event: CalendarEvent, width: Optional[int] = None) -> list[Text]:
    lines = [_event_chip(event, width)]
    for detail in _event_details(event):
        line = Text("  ")
        line.append_text(detail)
        lines.append(_fit(line, width))
    return lines


def _fit(line: Text, width: Optional[int]) -> Text:
    if width is not None:
        line.truncate(width, overflow="ellipsis")
    return line


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len > 3:
        return text[: max_len - 3] + "..."
    return text[: max(max_len, 0)]


def _now_slot(
    day: pendulum.DateTime,
    quarter_time: Optional[pendulum.DateTime],
    metrics: GridMetrics,
) -> Optional[int]:
    if quarter_time is None or not same_local_day(day, quarter_time):
        return None
    return _clamp_slot(slot_at(quarter_time.in_tz("local"), metrics), metrics)


def _clamp_slot(slot: int, metrics: GridMetrics) -> int:
    last_slot = len(hour_rows(metrics["start_hour"])) * 4 - 1
    return min(max(slot, 0), last_slot)


def _timeline_slots(
    timed_events: Iterable[CalendarEvent],
    metrics: GridMetrics,
    now_slot: Optional[int],
) -> list[int]:
    """Full-hour rows plus every quarter-hour row that holds an event or the now line."""
    slots = {index * 4 for index in range(len(hour_rows(metrics["start_hour"])))}
    for event in timed_events:
        if event["time"] is not None:
            slots.add(_event_slot(event["time"], metrics))
    if now_slot is not None:
        slots.add(now_slot)
    return sorted(slots)


def _event_slot(time: pendulum.DateTime, metrics: GridMetrics) -> int:
    # Reminders before the grid start are pinned to the first row
    return _clamp_slot(slot_at(time.in_tz("local"), metrics), metrics)


def _events_by_slot(
    timed_events: Iterable[CalendarEvent], metrics: GridMetrics
) -> dict[int, list[CalendarEvent]]:
    events_by_slot: dict[int, list[CalendarEvent]] = {}
    for event in timed_events:
        if event["time"] is None:
            continue
        events_by_slot.setdefault(_event_slot(event["time"], metrics), []).append(event)
    return events_by_slot


def _detail_rows(
    timed_events: Iterable[CalendarEvent], metrics: GridMetrics
) -> dict[int, int]:
    """Number of detail lines printed under each occupied timeline row."""
    return {
        slot: sum(len(_event_details(event)) for event in slot_events)
        for slot, slot_events in _events_by_slot(timed_events, metrics).items()
    }


def _slot_label(slot: int, metrics: GridMetrics) -> str:
    # Wall-clock arithmetic, so rows keep their labels across DST changes
    hour = metrics["start_hour"] + slot // 4
    minute = (slot % 4) * 15
    return f"{hour:02d}:{minute:02d}"


def _render_timeline(
    day: pendulum.DateTime,
    timed_events: list[CalendarEvent],
    metrics: GridMetrics,
    slots: list[int],
    quarter_time: Optional[pendulum.DateTime],
    width: Optional[int] = None,
    detail_rows: Optional[dict[int, int]] = None,
) -> list[Text]:
    events_by_slot = _events_by_slot(timed_events, metrics)
    now_slot = _now_slot(day, quarter_time, metrics)
    gutter_width = TIME_GUTTER_WIDTH + 2

    lines: list[Text] = []
    for slot in slots:
        label = f"{_slot_label(slot, metrics)} "
        line = Text()
        if slot == now_slot:
            line.append(label, style=NOW_LINE_STYLE)
        elif slot % 4 == 0:
            line.append(label, style="dim")
        else:
            line.append(label, style="bright_black")
        line.append("│ ", style="bright_black")

        slot_events = events_by_slot.get(slot, [])
        available_width = None if width is None else width - gutter_width
        for index, event in enumerate(slot_events):
            if index > 0:
                line.append(" ")
            remaining = None
            if available_width is not None:
                remaining = available_width - (len(line.plain) - gutter_width)
                if remaining <= 2:
                    break
            title = event["title"]
            if remaining is not None:
                title = _truncate(title, remaining - 2)
            line.append("■ ", style=event["color"])
            line.append(title, style=event["color"])
        lines.append(line)

        details = [detail for event in slot_events for detail in _event_details(event)]
        padded_rows = max(len(details), (detail_rows or {}).get(slot, 0))
        for row in range(padded_rows):
            detail_line = Text(" " * TIME_GUTTER_WIDTH)
            detail_line.append("│ ", style="bright_black")
            if row < len(details):
                detail_line.append("  ")
                detail_line.append_text(details[row])
            lines.append(_fit(detail_line, width))

    return lines
