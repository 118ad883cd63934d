from events.domain.errors import (
    DomainError,
    ErrorCode,
    EventRequiredError,
    EventStoreError,
    InvalidEventError,
)
from events.domain.models import Event, EventStatus

__all__ = [
    "Event",
    "EventStatus",
    "DomainError",
    "ErrorCode",
    "EventRequiredError",
    "EventStoreError",
    "InvalidEventError",
]
