# In-memory calendar: ordered events + monotonic id counter.
#
# Events keep insertion order (load order, then creation order); list/search
# return them in that order. Ids are never reused within a session: last_id only
# grows, and load() raises it to the largest id read from the file.

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from almanac.calendar.clock import Clock, LocalClock
from almanac.calendar.codec import LoadReport, read_calendar, write_calendar
from almanac.calendar.errors import EventNotFoundError, InvalidEventError
from almanac.calendar.event import Event, check_date, check_text, check_time, validation_reason
from almanac.utils.config import CONFIG
from almanac.utils.debug import debug_log

_CHECKS = {
    "title": check_text,
    "date": check_date,
    "time": check_time,
    "description": check_text,
}


class CalendarStore:
    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or LocalClock()
        self.events: List[Event] = []
        self.last_id = 0

    def __len__(self) -> int:
        return len(self.events)

    def _find(self, event_id: int) -> Optional[Event]:
        for e in self.events:
            if e.id == event_id:
                return e
        return None

    # ---- mutations ----

    def create(self, title: str, date: str, time: str, description: str = "") -> int:
        """Append a new event and return its id."""
        new_id = self.last_id + 1
        try:
            event = Event(id=new_id, title=title, date=date, time=time, description=description)
        except ValidationError as e:
            raise InvalidEventError(validation_reason(e)) from e
        self.last_id = new_id
        self.events.append(event)
        debug_log(f"created event {new_id}")
        return new_id

    def delete(self, event_id: int) -> bool:
        event = self._find(event_id)
        if event is None:
            return False
        self.events.remove(event)
        debug_log(f"deleted event {event_id}")
        return True

    def update(self, event_id: int, title: Optional[str] = None, date: Optional[str] = None,
               time: Optional[str] = None, description: Optional[str] = None) -> bool:
        """
        Overwrite the given fields. None or "" keeps the current value.
        All new values are validated before any is applied.
        """
        event = self._find(event_id)
        if event is None:
            return False

        given = {"title": title, "date": date, "time": time, "description": description}
        changes: Dict[str, str] = {k: v for k, v in given.items() if v}
        if not changes:
            return True

        for k, v in changes.items():
            try:
                _CHECKS[k](v)
            except ValueError as e:
                raise InvalidEventError(f"{k}: {e}") from e

        for k, v in changes.items():
            setattr(event, k, v)
        debug_log(f"updated event {event_id}: {', '.join(changes)}")
        return True

    # ---- queries ----

    def get(self, event_id: int) -> Optional[Event]:
        event = self._find(event_id)
        return event.model_copy() if event is not None else None

    def require(self, event_id: int) -> Event:
        event = self.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list(self) -> List[Event]:
        return [e.model_copy() for e in self.events]

    def search(self, query: str) -> List[Event]:
        """Case-sensitive substring match on title or description."""
        return [e.model_copy() for e in self.events
                if query in e.title or query in e.description]

    def upcoming(self, now_date: Optional[str] = None, now_time: Optional[str] = None) -> List[Event]:
        """
        Events at or after (now_date, now_time), earliest first.
        Missing arguments are filled from the store's clock.
        Comparison is on the YYYY-MM-DD / HH:MM strings; ties keep insertion order.
        """
        if now_date is None or now_time is None:
            clock_date, clock_time = self.clock.now()
            now_date = clock_date if now_date is None else now_date
            now_time = clock_time if now_time is None else now_time

        selected = [e for e in self.events
                    if e.date > now_date or (e.date == now_date and e.time >= now_time)]
        selected.sort(key=lambda e: e.when)
        return [e.model_copy() for e in selected]

    # ---- persistence ----

    def save(self, path: str | Path, atomic: Optional[bool] = None) -> int:
        if atomic is None:
            atomic = CONFIG["storage"]["atomic_save"]
        return write_calendar(path, self.events, atomic=atomic)

    def load(self, path: str | Path) -> LoadReport:
        """Append events read from `path`. The store is untouched if the file can't be read."""
        report = read_calendar(path, existing_ids=(e.id for e in self.events))
        self.events.extend(report.events)
        self.last_id = max(self.last_id, report.max_id)
        return report
