"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

import logging

from events.domain import Event, EventStatus, InvalidEventError
from events.stores.interfaces import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, repository: EventRepository) -> None:
        if repository is None:
            raise TypeError("repository cannot be None")
        self._repository = repository

    async def load_events(self) -> list[Event]:
        """Return all events, most recent first."""
        return await self._repository.load_events()

    async def create_event(
        self,
        title: str,
        category: str,
        location: str,
        date_time_millis: int,
        capacity_total: int,
        capacity_remaining: int,
    ) -> None:
        """Create a new ACTIVE event; the store assigns its identity."""
        event = Event(
            document_id="",
            event_id="",
            title=title,
            category=category,
            location=location,
            date_time_millis=date_time_millis,
            status=EventStatus.ACTIVE,
            capacity_total=capacity_total,
            capacity_remaining=capacity_remaining,
        )
        await self._repository.create_event(event)

    async def update_event(
        self,
        existing: Event | None,
        title: str,
        category: str,
        location: str,
        date_time_millis: int,
        capacity_total: int,
        capacity_remaining: int,
    ) -> None:
        """Replace an event's details, keeping its identity and status.

        Raises:
            InvalidEventError: If existing is None.
        """
        if existing is None:
            raise InvalidEventError()
        event = Event(
            document_id=existing.document_id,
            event_id=existing.event_id,
            title=title,
            category=category,
            location=location,
            date_time_millis=date_time_millis,
            status=existing.status,
            capacity_total=capacity_total,
            capacity_remaining=capacity_remaining,
        )
        await self._repository.update_event(event)

    async def update_event_status(self, event: Event | None, target_status: EventStatus) -> None:
        """Move an event to target_status. This is the only way status changes.

        Raises:
            InvalidEventError: If event is None.
        """
        if event is None:
            raise InvalidEventError()
        logger.info("Setting event %s to %s", event.document_id, target_status)
        await self._repository.update_status(event.document_id, target_status)
