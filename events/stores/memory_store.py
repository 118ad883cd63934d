"""In-memory implementation of the EventRepository, used by tests."""

import logging
import uuid
from typing import Any

from events.domain import (
    Event,
    EventRequiredError,
    EventStatus,
    EventStoreError,
    ErrorCode,
    InvalidEventError,
)
from events.domain.errors import (
    LOAD_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE,
    STATUS_UPDATE_FAILED_MESSAGE,
    resolve_error_message,
)
from events.stores.interfaces import EventRepository
from events.stores.mapper import FIELD_STATUS, decode_event, encode_event, sort_events

logger = logging.getLogger(__name__)


class InMemoryEventRepository(EventRepository):
    """Event store over a dict of raw documents.

    Documents go through the same mapper as the database store, so seeded
    legacy documents decode exactly as they would in production. Set
    ``error`` to make every following operation fail with that exception.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, Any]] = []
        self.error: Exception | None = None

    def put_document(self, document_id: str, data: dict[str, Any]) -> None:
        self.documents[document_id] = dict(data)

    async def load_events(self) -> list[Event]:
        self.calls.append(("load_events", None))
        self._raise_if_failing(ErrorCode.LOAD_FAILED, LOAD_FAILED_MESSAGE)
        events = []
        for document_id, data in self.documents.items():
            try:
                events.append(decode_event(document_id, data))
            except (AttributeError, TypeError, ValueError, OverflowError):
                logger.warning("Skipping malformed event document %s", document_id, exc_info=True)
        return sort_events(events)

    async def create_event(self, event: Event) -> None:
        self.calls.append(("create_event", event))
        if event is None:
            raise EventRequiredError()
        self._raise_if_failing(ErrorCode.SAVE_FAILED, SAVE_FAILED_MESSAGE)
        document_id = uuid.uuid4().hex[:20]
        self.documents[document_id] = encode_event(event, document_id)

    async def update_event(self, event: Event) -> None:
        self.calls.append(("update_event", event))
        if event is None or not event.document_id:
            raise InvalidEventError()
        self._raise_if_failing(ErrorCode.SAVE_FAILED, SAVE_FAILED_MESSAGE)
        if event.document_id not in self.documents:
            raise EventStoreError(
                ErrorCode.SAVE_FAILED, f"No document to update: events/{event.document_id}"
            )
        self.documents[event.document_id].update(
            encode_event(event, event.event_id or event.document_id)
        )

    async def update_status(self, document_id: str, status: EventStatus | None) -> None:
        self.calls.append(("update_status", (document_id, status)))
        if not document_id or not document_id.strip():
            raise InvalidEventError()
        self._raise_if_failing(ErrorCode.STATUS_UPDATE_FAILED, STATUS_UPDATE_FAILED_MESSAGE)
        if document_id not in self.documents:
            raise EventStoreError(
                ErrorCode.STATUS_UPDATE_FAILED, f"No document to update: events/{document_id}"
            )
        self.documents[document_id][FIELD_STATUS] = (status or EventStatus.ACTIVE).value

    def _raise_if_failing(self, code: ErrorCode, fallback: str) -> None:
        if self.error is not None:
            raise EventStoreError(code, resolve_error_message(self.error, fallback))
