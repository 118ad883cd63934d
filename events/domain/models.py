"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
The Django ORM document model is in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Self

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class EventStatus(Enum):
    """Lifecycle status of an event."""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"

    @classmethod
    def from_value(cls, raw: str | None) -> Self:
        """Parse a stored status; anything unrecognized is ACTIVE."""
        if raw is None:
            return cls.ACTIVE
        if raw.strip().upper() == cls.CANCELLED.value:
            return cls.CANCELLED
        return cls.ACTIVE


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    Text fields are trimmed (None becomes ""), a missing status is ACTIVE and
    capacities never go below zero. document_id and event_id stay empty until
    the repository persists the event for the first time.
    """

    document_id: str
    event_id: str
    title: str
    category: str
    location: str
    date_time_millis: int
    status: EventStatus
    capacity_total: int
    capacity_remaining: int

    def __post_init__(self) -> None:
        for name in ("document_id", "event_id", "title", "category", "location"):
            object.__setattr__(self, name, _clean(getattr(self, name)))
        if self.status is None:
            object.__setattr__(self, "status", EventStatus.ACTIVE)
        object.__setattr__(self, "capacity_total", max(0, self.capacity_total))
        object.__setattr__(self, "capacity_remaining", max(0, self.capacity_remaining))

    @property
    def is_cancelled(self) -> bool:
        return self.status is EventStatus.CANCELLED

    @property
    def starts_at(self) -> datetime | None:
        """Aware UTC start time, or None while the date is unset."""
        if self.date_time_millis <= 0:
            return None
        return EPOCH + timedelta(milliseconds=self.date_time_millis)


def _clean(value: str | None) -> str:
    return "" if value is None else value.strip()
