"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every operation is a
coroutine that either returns or raises a DomainError, exactly once.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventStatus


class EventRepository(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    async def load_events(self) -> list[Event]:
        """Return all events ordered by date_time_millis descending.

        Raises:
            EventStoreError: If the store cannot be read.
        """
        ...

    @abstractmethod
    async def create_event(self, event: Event) -> None:
        """Persist a new event under a freshly assigned identity.

        Raises:
            EventRequiredError: If event is None.
            EventStoreError: If the write fails.
        """
        ...

    @abstractmethod
    async def update_event(self, event: Event) -> None:
        """Rewrite every field of an existing event, keyed by its document_id.

        Raises:
            InvalidEventError: If event is None or has no document_id.
            EventStoreError: If the write fails.
        """
        ...

    @abstractmethod
    async def update_status(self, document_id: str, status: EventStatus | None) -> None:
        """Write the status field alone; a None status is stored as ACTIVE.

        Raises:
            InvalidEventError: If document_id is blank.
            EventStoreError: If the write fails.
        """
        ...
