# SPDX-License-Identifier: MIT

from typing import Any, NotRequired, Optional, TypedDict


class Reminder(TypedDict):
    # pendulum.DateTime, datetime/date or ISO string as handed over by the store
    date_time: Any
    notifications: NotRequired[Optional[list[str]]]


class Note(TypedDict):
    id: str
    title: str
    content: NotRequired[Optional[str]]
    tags: NotRequired[Optional[list[str]]]
    archived: NotRequired[bool]
    reminder: NotRequired[Optional[Reminder]]
