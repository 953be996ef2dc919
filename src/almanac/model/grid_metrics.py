# SPDX-License-Identifier: MIT

from typing import TypedDict


class GridMetrics(TypedDict):
    quarter_hour_px: int
    start_hour: int
