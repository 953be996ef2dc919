# SPDX-License-Identifier: MIT

import datetime

import pendulum

from almanac.configuration import Configuration
from almanac.model.grid_metrics import GridMetrics

QUARTER_MINUTES = 15


def get_grid_metrics(config: Configuration) -> GridMetrics:
    """Build the one GridMetrics value shared by the day and week time grids."""
    return {
        "quarter_hour_px": config["calendar_quarter_hour_px"],
        "start_hour": config["calendar_day_start_hour"],
    }


def px_at(
    time: datetime.time | datetime.datetime, anchor_hour: int, quarter_hour_px: int
) -> float:
    """
    Vertical offset of a wall-clock time on a quarter-hour grid.

    The grid starts at `anchor_hour`; every quarter hour is `quarter_hour_px` tall.

    Times before `anchor_hour` produce negative offsets; renderers clip them.
    """
    minutes = (time.hour - anchor_hour) * 60 + time.minute
    return minutes / QUARTER_MINUTES * quarter_hour_px


def slot_at(time: datetime.time | datetime.datetime, metrics: GridMetrics) -> int:
    """Quarter-hour row index of `time` on the grid described by `metrics`."""
    offset = px_at(time, metrics["start_hour"], metrics["quarter_hour_px"])
    return int(offset // metrics["quarter_hour_px"])


def hour_rows(start_hour: int) -> list[int]:
    return list(range(start_hour, 24))


def round_down_to_quarter(moment: pendulum.DateTime) -> pendulum.DateTime:
    return moment.set(
        minute=(moment.minute // QUARTER_MINUTES) * QUARTER_MINUTES,
        second=0,
        microsecond=0,
    )
