# Calendar file format: one event per line, "id|title|date|time|description\n".
# UTF-8, no header, no escaping. Fields are written and read verbatim; the
# Event model keeps "|" and newlines out of title/description.

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from almanac.calendar.errors import CalendarFileError
from almanac.calendar.event import DELIMITER, U64_MAX, Event
from almanac.utils.debug import debug_log
from almanac.utils.persistance import read_text, write_text

FIELD_COUNT = 5


@dataclass
class SkippedLine:
    line_no: int        # 1-based
    line: str
    reason: str
    silent: bool = False  # wrong field count: not shown to the user


@dataclass
class LoadReport:
    events: List[Event] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)
    max_id: int = 0

    @property
    def reported(self) -> List[SkippedLine]:
        return [s for s in self.skipped if not s.silent]


def parse_u64(text: str) -> int:
    """Parse an unsigned 64-bit id: optional '+', ASCII digits only."""
    digits = text[1:] if text.startswith("+") else text
    if not digits:
        raise ValueError("cannot parse integer from empty string")
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value > U64_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def format_event(event: Event) -> str:
    return DELIMITER.join(
        [str(event.id), event.title, event.date, event.time, event.description]
    ) + "\n"


def dump_events(events: Iterable[Event]) -> str:
    return "".join(format_event(e) for e in events)


def parse_events(text: str, existing_ids: Iterable[int] = ()) -> LoadReport:
    """
    Parse file contents into events.
    Lines with the wrong field count, an unparseable id, or an id that is already
    taken (in `existing_ids` or earlier in the file) are skipped and recorded.
    """
    report = LoadReport()
    seen = set(existing_ids)

    for line_no, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        parts = line.split(DELIMITER)
        if len(parts) != FIELD_COUNT:
            if line.strip():
                report.skipped.append(SkippedLine(
                    line_no, line, f"expected {FIELD_COUNT} fields, found {len(parts)}", silent=True
                ))
                debug_log(f"line {line_no}: expected {FIELD_COUNT} fields, found {len(parts)}")
            continue

        try:
            event_id = parse_u64(parts[0])
        except ValueError as e:
            report.skipped.append(SkippedLine(line_no, line, str(e)))
            continue

        if event_id in seen:
            report.skipped.append(SkippedLine(line_no, line, f"duplicate id {event_id}"))
            continue
        seen.add(event_id)

        report.events.append(Event.model_construct(
            id=event_id,
            title=parts[1],
            date=parts[2],
            time=parts[3],
            description=parts[4],
        ))
        report.max_id = max(report.max_id, event_id)

    return report


def read_calendar(path: str | Path, existing_ids: Iterable[int] = ()) -> LoadReport:
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise CalendarFileError("read", str(path), e) from e
    report = parse_events(text, existing_ids)
    debug_log(f"read {len(report.events)} event(s) from {path}, skipped {len(report.skipped)}")
    return report


def write_calendar(path: str | Path, events: Iterable[Event], atomic: bool = False) -> int:
    events = list(events)
    try:
        write_text(path, dump_events(events), atomic=atomic)
    except OSError as e:
        raise CalendarFileError("write", str(path), e) from e
    debug_log(f"wrote {len(events)} event(s) to {path}")
    return len(events)
