"""Django ORM implementation of the EventRepository.

Queries run in a worker thread through ``sync_to_async``; rows are turned
into plain documents and handed to the mapper.
"""

import logging
from typing import Any

from asgiref.sync import sync_to_async
from django.db import DatabaseError

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
from events.models import EventDocument, new_document_id
from events.stores.interfaces import EventRepository
from events.stores.mapper import FIELD_DATE_TIME, FIELD_STATUS, decode_event, encode_event, sort_events

logger = logging.getLogger(__name__)


class DjangoEventRepository(EventRepository):
    """Database-backed event store using Django ORM."""

    async def load_events(self) -> list[Event]:
        try:
            documents = await sync_to_async(self._fetch_documents)()
        except DatabaseError as exc:
            logger.error("Loading events failed: %s", exc)
            raise EventStoreError(
                ErrorCode.LOAD_FAILED, resolve_error_message(exc, LOAD_FAILED_MESSAGE)
            ) from exc

        events = []
        for document_id, data in documents:
            try:
                events.append(decode_event(document_id, data))
            except (AttributeError, TypeError, ValueError, OverflowError):
                logger.warning("Skipping malformed event document %s", document_id, exc_info=True)
        return sort_events(events)

    async def create_event(self, event: Event) -> None:
        if event is None:
            raise EventRequiredError()
        document_id = new_document_id()
        try:
            await sync_to_async(self._write)(document_id, encode_event(event, document_id), True)
        except DatabaseError as exc:
            logger.error("Creating event failed: %s", exc)
            raise EventStoreError(
                ErrorCode.SAVE_FAILED, resolve_error_message(exc, SAVE_FAILED_MESSAGE)
            ) from exc
        logger.info("Created event %s", document_id)

    async def update_event(self, event: Event) -> None:
        if event is None or not event.document_id:
            raise InvalidEventError()
        record = encode_event(event, event.event_id or event.document_id)
        try:
            await sync_to_async(self._write)(event.document_id, record, False)
        except DatabaseError as exc:
            logger.error("Updating event %s failed: %s", event.document_id, exc)
            raise EventStoreError(
                ErrorCode.SAVE_FAILED, resolve_error_message(exc, SAVE_FAILED_MESSAGE)
            ) from exc
        except EventDocument.DoesNotExist as exc:
            raise EventStoreError(
                ErrorCode.SAVE_FAILED, f"No document to update: events/{event.document_id}"
            ) from exc

    async def update_status(self, document_id: str, status: EventStatus | None) -> None:
        if not document_id or not document_id.strip():
            raise InvalidEventError()
        value = (status or EventStatus.ACTIVE).value
        try:
            await sync_to_async(self._write_status)(document_id, value)
        except DatabaseError as exc:
            logger.error("Updating status of event %s failed: %s", document_id, exc)
            raise EventStoreError(
                ErrorCode.STATUS_UPDATE_FAILED,
                resolve_error_message(exc, STATUS_UPDATE_FAILED_MESSAGE),
            ) from exc
        except EventDocument.DoesNotExist as exc:
            raise EventStoreError(
                ErrorCode.STATUS_UPDATE_FAILED, f"No document to update: events/{document_id}"
            ) from exc
        logger.info("Event %s is now %s", document_id, value)

    def _fetch_documents(self) -> list[tuple[str, Any]]:
        documents = []
        for row in EventDocument.objects.all():
            data = row.fields
            if isinstance(data, dict) and row.date_time is not None:
                data = {**data, FIELD_DATE_TIME: row.date_time}
            documents.append((row.id, data))
        return documents

    def _write(self, document_id: str, record: dict[str, Any], create: bool) -> None:
        record = dict(record)
        date_time = record.pop(FIELD_DATE_TIME)
        if create:
            EventDocument.objects.create(id=document_id, date_time=date_time, fields=record)
            return
        document = EventDocument.objects.get(pk=document_id)
        # Fields outside the write record, such as a legacy flag, are left alone.
        document.fields = {**document.fields, **record} if isinstance(document.fields, dict) else record
        document.date_time = date_time
        document.save(update_fields=["fields", "date_time", "updated_at"])

    def _write_status(self, document_id: str, value: str) -> None:
        document = EventDocument.objects.get(pk=document_id)
        fields = document.fields if isinstance(document.fields, dict) else {}
        document.fields = {**fields, FIELD_STATUS: value}
        document.save(update_fields=["fields", "updated_at"])
