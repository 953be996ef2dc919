# SPDX-License-Identifier: MIT

import logging
import threading
from types import TracebackType
from typing import Callable, Optional

import pendulum

from almanac.configuration import DEFAULT_NOW_REFRESH_SECONDS
from almanac.time import now_local
from almanac.view.grid import round_down_to_quarter

logger = logging.getLogger(__name__)

Clock = Callable[[], pendulum.DateTime]
Subscriber = Callable[[pendulum.DateTime], None]


class CurrentTimeIndicator:
    """
    Live "now" value rounded down to the quarter hour.

    The clock is re-read every `interval` seconds on a daemon timer. Each tick
    runs to completion before the next one is scheduled, and subscribers are
    only called when the rounded value changes. Use it as a context manager
    to tie the timer to the lifetime of a view.
    """

    def __init__(
        self,
        clock: Clock = now_local,
        interval: float = DEFAULT_NOW_REFRESH_SECONDS,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        self._clock = clock
        self._interval = interval
        self._quarter_time = round_down_to_quarter(clock())
        self._subscribers: list[Subscriber] = []
        self._timer: Optional[threading.Timer] = None
        self._running = False
        self._lock = threading.RLock()

    @property
    def quarter_time(self) -> pendulum.DateTime:
        return self._quarter_time

    @property
    def is_running(self) -> bool:
        return self._running

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`, call it with the latest value, and return an unsubscribe function."""
        self._subscribers.append(callback)
        callback(self._quarter_time)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def tick(self) -> bool:
        latest = round_down_to_quarter(self._clock())
        if latest == self._quarter_time:
            return False

        self._quarter_time = latest
        for callback in list(self._subscribers):
            try:
                callback(latest)
            except Exception:
                logger.exception("Current-time subscriber failed")
        return True

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self.tick()
            self.__schedule()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def __schedule(self) -> None:
        timer = threading.Timer(self._interval, self.__run)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def __run(self) -> None:
        # stop() blocks until an in-flight tick has finished
        with self._lock:
            if not self._running:
                return
            self.tick()
            if self._running:
                self.__schedule()

    def __enter__(self) -> "CurrentTimeIndicator":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.stop()
