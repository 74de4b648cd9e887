# Source of "now" for the upcoming query, as the (YYYY-MM-DD, HH:MM) strings
# events are compared against. Seconds are dropped, not rounded.

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional, Tuple

from dateutil import tz

DATE_FMT = "%Y-%m-%d"
TIME_FMT = "%H:%M"


def _local_now() -> datetime:
    return datetime.now(tz.tzlocal())


def format_now(now: datetime) -> Tuple[str, str]:
    return now.strftime(DATE_FMT), now.strftime(TIME_FMT)


class Clock(ABC):
    @abstractmethod
    def now(self) -> Tuple[str, str]:
        ...


class LocalClock(Clock):
    """Host wall clock in the local time zone."""

    def __init__(self, now_fn: Optional[Callable[[], datetime]] = None):
        self._now_fn = now_fn or _local_now

    def now(self) -> Tuple[str, str]:
        return format_now(self._now_fn())


class FixedClock(Clock):
    """Always reports the same instant."""

    def __init__(self, date: str, time: str):
        self.date = date
        self.time = time

    def now(self) -> Tuple[str, str]:
        return self.date, self.time
