# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

Granularity = Literal["day", "week", "month"]
Direction = Literal["prev", "next"]

GRANULARITIES: tuple[Granularity, ...] = ("day", "week", "month")


class NavigationState(TypedDict):
    focus_day: pendulum.DateTime
    granularity: Granularity
    anchor: pendulum.DateTime
