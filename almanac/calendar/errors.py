"""Domain error codes for the calendar."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT = "INVALID_EVENT"
    FILE_IO = "FILE_IO"


@dataclass(eq=False)
class CalendarError(Exception):
    """Base calendar error with code and user-facing message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return self.message


class EventNotFoundError(CalendarError):
    """Raised when no event has the requested id."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event with ID {event_id} not found.",
        )
        self.event_id = event_id


class InvalidEventError(CalendarError):
    """Raised when a field value cannot be stored."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT,
            message=f"Invalid event: {reason}",
        )
        self.reason = reason


class CalendarFileError(CalendarError):
    """Raised when a calendar file cannot be read or written."""

    def __init__(self, action: str, path: str, cause: Exception) -> None:
        super().__init__(
            code=ErrorCode.FILE_IO,
            message=f"Failed to {action} file: {cause}",
        )
        self.path = path
        self.cause = cause
