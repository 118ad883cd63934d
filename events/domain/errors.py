"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum

INVALID_EVENT_MESSAGE = "Invalid event."
EVENT_REQUIRED_MESSAGE = "Event cannot be null."
LOAD_FAILED_MESSAGE = "Failed to load events."
SAVE_FAILED_MESSAGE = "Could not save event."
STATUS_UPDATE_FAILED_MESSAGE = "Could not update event status."


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_EVENT = "INVALID_EVENT"
    EVENT_REQUIRED = "EVENT_REQUIRED"
    LOAD_FAILED = "LOAD_FAILED"
    SAVE_FAILED = "SAVE_FAILED"
    STATUS_UPDATE_FAILED = "STATUS_UPDATE_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEventError(DomainError):
    """Raised when an operation targets a missing or unidentified event."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT, message=INVALID_EVENT_MESSAGE)


class EventRequiredError(DomainError):
    """Raised when no event is given to create."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_REQUIRED, message=EVENT_REQUIRED_MESSAGE)


class EventStoreError(DomainError):
    """Raised when the backing store fails a load or write."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(code=code, message=message)


def resolve_error_message(error: BaseException | None, fallback: str) -> str:
    """Return the backend's own message when it has one, else the fallback."""
    message = "" if error is None else str(error).strip()
    return message or fallback
