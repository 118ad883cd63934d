"""Unit tests for EventService.

These test the domain rules and error mapping against the in-memory store.
Run with: pytest tests/test_services.py -v
"""

from datetime import UTC, datetime

import pytest
from asgiref.sync import async_to_sync

from events.domain import (
    Event,
    EventRequiredError,
    EventStatus,
    EventStoreError,
    InvalidEventError,
)
from events.services.event_service import EventService


def load(service):
    return async_to_sync(service.load_events)()


def seed(repository, document_id="doc-1", **fields):
    document = {
        "eventId": document_id,
        "title": "Jazz Night",
        "category": "Music",
        "location": "Montreal",
        "dateTime": datetime(2025, 5, 1, 10, 0, tzinfo=UTC),
        "status": "ACTIVE",
        "capacityTotal": 100,
        "capacityRemaining": 40,
    }
    document.update(fields)
    repository.put_document(document_id, document)


class TestConstruction:
    def test_repository_is_required(self):
        with pytest.raises(TypeError):
            EventService(None)


class TestCreateEvent:
    """Tests for EventService.create_event."""

    def test_create_trims_and_stamps_active(self, event_service, event_repository):
        async_to_sync(event_service.create_event)(
            "  Jazz Night ", " Music", "Montreal  ", 1_746_093_600_000, 100, 100
        )

        _, event = event_repository.calls[-1]
        assert event == Event("", "", "Jazz Night", "Music", "Montreal", 1_746_093_600_000, EventStatus.ACTIVE, 100, 100)

    def test_created_event_gets_identity_from_store(self, event_service):
        async_to_sync(event_service.create_event)("Jazz", "Music", "Montreal", 1_000, 10, 5)

        (event,) = load(event_service)
        assert event.document_id
        assert event.event_id == event.document_id
        assert event.status is EventStatus.ACTIVE

    def test_store_failure_message_is_verbatim(self, event_service, event_repository):
        event_repository.error = RuntimeError("  PERMISSION_DENIED: Missing permissions  ")
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_service.create_event)("Jazz", "Music", "Montreal", 1_000, 10, 5)
        assert excinfo.value.message == "PERMISSION_DENIED: Missing permissions"

    def test_blank_store_failure_uses_fallback(self, event_service, event_repository):
        event_repository.error = RuntimeError(" ")
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_service.create_event)("Jazz", "Music", "Montreal", 1_000, 10, 5)
        assert excinfo.value.message == "Could not save event."

    def test_repository_rejects_missing_event(self, event_repository):
        with pytest.raises(EventRequiredError) as excinfo:
            async_to_sync(event_repository.create_event)(None)
        assert excinfo.value.message == "Event cannot be null."


class TestUpdateEvent:
    """Tests for EventService.update_event."""

    def test_update_preserves_identity_and_status(self, event_service, event_repository):
        seed(event_repository, "doc-1", eventId="evt-9", status="CANCELLED")
        (existing,) = load(event_service)

        async_to_sync(event_service.update_event)(
            existing, " Blues Night ", "Music", "Quebec", 2_000, 50, 20
        )

        (updated,) = load(event_service)
        assert updated == Event("doc-1", "evt-9", "Blues Night", "Music", "Quebec", 2_000, EventStatus.CANCELLED, 50, 20)

    def test_update_passes_existing_identity_to_store(self, event_service, event_repository):
        seed(event_repository, "doc-1")
        (existing,) = load(event_service)

        async_to_sync(event_service.update_event)(existing, "T", "C", "L", 5, 1, 1)

        name, event = event_repository.calls[-1]
        assert name == "update_event"
        assert (event.document_id, event.event_id, event.status) == (
            existing.document_id,
            existing.event_id,
            existing.status,
        )

    def test_update_without_event_fails_without_store_call(self, event_service, event_repository):
        with pytest.raises(InvalidEventError) as excinfo:
            async_to_sync(event_service.update_event)(None, "T", "C", "L", 5, 1, 1)
        assert excinfo.value.message == "Invalid event."
        assert event_repository.calls == []

    def test_update_rederives_event_id_from_document_id(self, event_service, event_repository):
        seed(event_repository, "doc-1", eventId="")
        existing = Event("doc-1", "", "Jazz", "Music", "Montreal", 1_000, EventStatus.ACTIVE, 10, 10)

        async_to_sync(event_service.update_event)(existing, "Jazz", "Music", "Montreal", 1_000, 10, 10)

        assert event_repository.documents["doc-1"]["eventId"] == "doc-1"

    def test_update_keeps_fields_outside_write_record(self, event_service, event_repository):
        seed(event_repository, "doc-1", cancelled=True, status="ACTIVE")
        (existing,) = load(event_service)

        async_to_sync(event_service.update_event)(existing, "T", "C", "L", 5, 1, 1)

        assert event_repository.documents["doc-1"]["cancelled"] is True
        assert event_repository.documents["doc-1"]["status"] == "ACTIVE"

    def test_update_of_unknown_document_fails(self, event_service):
        ghost = Event("ghost", "ghost", "T", "C", "L", 5, EventStatus.ACTIVE, 1, 1)
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_service.update_event)(ghost, "T", "C", "L", 5, 1, 1)
        assert "ghost" in excinfo.value.message

    def test_repository_rejects_event_without_document_id(self, event_repository):
        event = Event("", "", "T", "C", "L", 5, EventStatus.ACTIVE, 1, 1)
        with pytest.raises(InvalidEventError):
            async_to_sync(event_repository.update_event)(event)


class TestUpdateEventStatus:
    """Tests for EventService.update_event_status."""

    def test_status_transition(self, event_service, event_repository):
        seed(event_repository, "doc-1")
        (event,) = load(event_service)

        async_to_sync(event_service.update_event_status)(event, EventStatus.CANCELLED)

        assert event_repository.calls[-1] == ("update_status", ("doc-1", EventStatus.CANCELLED))
        (updated,) = load(event_service)
        assert updated.status is EventStatus.CANCELLED
        assert updated.title == event.title

    def test_status_without_event_fails_without_store_call(self, event_service, event_repository):
        with pytest.raises(InvalidEventError) as excinfo:
            async_to_sync(event_service.update_event_status)(None, EventStatus.ACTIVE)
        assert excinfo.value.message == "Invalid event."
        assert event_repository.calls == []

    def test_missing_status_is_stored_as_active(self, event_repository):
        seed(event_repository, "doc-1", status="CANCELLED")
        async_to_sync(event_repository.update_status)("doc-1", None)
        assert event_repository.documents["doc-1"]["status"] == "ACTIVE"

    def test_blank_document_id_is_invalid(self, event_repository):
        with pytest.raises(InvalidEventError):
            async_to_sync(event_repository.update_status)("  ", EventStatus.CANCELLED)

    def test_store_failure_uses_fallback(self, event_service, event_repository):
        seed(event_repository, "doc-1")
        (event,) = load(event_service)
        event_repository.error = RuntimeError("")
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_service.update_event_status)(event, EventStatus.CANCELLED)
        assert excinfo.value.message == "Could not update event status."


class TestLoadEvents:
    """Tests for EventService.load_events."""

    def test_events_sorted_most_recent_first(self, event_service, event_repository):
        seed(event_repository, "old", dateTime=datetime(2024, 1, 1, tzinfo=UTC))
        seed(event_repository, "new", dateTime=datetime(2026, 1, 1, tzinfo=UTC))
        seed(event_repository, "mid", dateTime=datetime(2025, 1, 1, tzinfo=UTC))

        assert [event.document_id for event in load(event_service)] == ["new", "mid", "old"]

    def test_ties_keep_store_order(self, event_service, event_repository):
        for document_id in ("b", "a", "c"):
            seed(event_repository, document_id, dateTime=datetime(2025, 1, 1, tzinfo=UTC))

        assert [event.document_id for event in load(event_service)] == ["b", "a", "c"]

    def test_legacy_documents_decode(self, event_service, event_repository):
        event_repository.put_document(
            "legacy",
            {"title": "Old Gala", "dateTime": "2025-05-01 10:00", "cancelled": True, "capacityTotal": "30"},
        )

        (event,) = load(event_service)

        assert event.event_id == "legacy"
        assert event.status is EventStatus.CANCELLED
        assert event.capacity_total == 30
        assert event.capacity_remaining == 30
        assert event.date_time_millis > 0

    def test_malformed_document_is_skipped(self, event_service, event_repository):
        seed(event_repository, "good")
        event_repository.documents["broken"] = ["not", "a", "document"]

        assert [event.document_id for event in load(event_service)] == ["good"]

    def test_load_failure_uses_fallback(self, event_service, event_repository):
        event_repository.error = RuntimeError()
        with pytest.raises(EventStoreError) as excinfo:
            load(event_service)
        assert excinfo.value.message == "Failed to load events."
