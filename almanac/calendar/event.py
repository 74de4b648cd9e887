# Calendar event model
#
# Field rules applied on create/update:
#   title, description: no "|" (the file delimiter), no "\n" or "\r"
#   date: YYYY-MM-DD and a real calendar date
#   time: HH:MM, 24-hour
# Events read back from a file are built with model_construct() and skip these checks.

from __future__ import annotations
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from almanac.utils.config import CONFIG

U64_MAX = 2**64 - 1
DELIMITER = "|"

_FORBIDDEN = {DELIMITER: "'|'", "\n": "a newline", "\r": "a carriage return"}
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}")


def check_text(value: str) -> str:
    for ch, name in _FORBIDDEN.items():
        if ch in value:
            raise ValueError(f"must not contain {name}")
    return value


def check_date(value: str) -> str:
    if not _DATE_RE.fullmatch(value):
        raise ValueError("date must be in YYYY-MM-DD format")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"{value} is not a valid date") from None
    return value


def check_time(value: str) -> str:
    if not _TIME_RE.fullmatch(value):
        raise ValueError("time must be in HH:MM format")
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValueError(f"{value} is not a valid time") from None
    return value


def validation_reason(exc: ValidationError) -> str:
    """One-line summary of a pydantic ValidationError."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "event"
        msg = err.get("msg", "")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{field}: {msg}")
    return "; ".join(parts)


class Event(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: int = Field(ge=0, le=U64_MAX, frozen=True)
    title: str
    date: str           # YYYY-MM-DD
    time: str           # HH:MM
    description: str = ""

    @field_validator("title", "description")
    @classmethod
    def _no_delimiters(cls, v: str) -> str:
        return check_text(v)

    @field_validator("date")
    @classmethod
    def _date_shape(cls, v: str) -> str:
        return check_date(v)

    @field_validator("time")
    @classmethod
    def _time_shape(cls, v: str) -> str:
        return check_time(v)

    @property
    def when(self) -> tuple[str, str]:
        return (self.date, self.time)

    def pretty(self, separator: Optional[str] = None) -> str:
        sep = separator if separator is not None else CONFIG["display"]["separator"]
        return (
            f"{sep}\n"
            f"ID: {self.id}\n"
            f"Title: {self.title}\n"
            f"Datetime: {self.date} {self.time}\n"
            f"Description: {self.description}\n"
            f"{sep}\n"
        )
