"""Integration tests for the Django ORM stores.

Run with: pytest tests/test_django_stores.py -v
"""

from datetime import UTC, datetime

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.contrib.sessions.backends.db import SessionStore

from accounts.domain import (
    AccountNotFoundError,
    AuthBackendError,
    AuthSession,
    InvalidCredentialsError,
    MissingRoleError,
    PhoneInUseError,
    UserRole,
)
from accounts.models import PhoneIndexEntry, UserProfile
from accounts.stores.django_store import (
    SIGNED_IN_EMAIL_KEY,
    SIGNED_IN_UID_KEY,
    DjangoAuthRepository,
)
from accounts.stores.interfaces import SIGNED_IN_ROLE_KEY
from events.domain import Event, EventStatus, EventStoreError, InvalidEventError
from events.models import EventDocument
from events.stores.django_store import DjangoEventRepository

MAY_FIRST = datetime(2025, 5, 1, 10, 0, tzinfo=UTC)
MAY_FIRST_MILLIS = int(MAY_FIRST.timestamp()) * 1000


@pytest.fixture(autouse=True)
def utc_time_zone(settings):
    settings.TIME_ZONE = "UTC"


@pytest.fixture
def event_store() -> DjangoEventRepository:
    return DjangoEventRepository()


@pytest.fixture
def auth_store() -> DjangoAuthRepository:
    return DjangoAuthRepository(SessionStore())


def load(store):
    return async_to_sync(store.load_events)()


def new_event(**overrides) -> Event:
    values = dict(
        document_id="",
        event_id="",
        title="Jazz Night",
        category="Music",
        location="Montreal",
        date_time_millis=MAY_FIRST_MILLIS,
        status=EventStatus.ACTIVE,
        capacity_total=100,
        capacity_remaining=100,
    )
    values.update(overrides)
    return Event(**values)


@pytest.mark.django_db
class TestDjangoEventRepository:
    """Tests for DjangoEventRepository."""

    def test_create_then_load(self, event_store):
        async_to_sync(event_store.create_event)(new_event())

        (event,) = load(event_store)

        row = EventDocument.objects.get()
        assert event.document_id == row.id
        assert event.event_id == row.id
        assert row.fields["eventId"] == row.id
        assert row.date_time == MAY_FIRST
        assert event.date_time_millis == MAY_FIRST_MILLIS
        assert event.status is EventStatus.ACTIVE

    def test_load_orders_most_recent_first(self, event_store):
        async_to_sync(event_store.create_event)(new_event(title="Old", date_time_millis=1_000))
        async_to_sync(event_store.create_event)(new_event(title="New", date_time_millis=MAY_FIRST_MILLIS))

        assert [event.title for event in load(event_store)] == ["New", "Old"]

    def test_update_replaces_fields(self, event_store):
        async_to_sync(event_store.create_event)(new_event())
        (existing,) = load(event_store)
        changed = new_event(
            document_id=existing.document_id,
            event_id=existing.event_id,
            title="Blues Night",
            capacity_total=50,
            capacity_remaining=10,
        )

        async_to_sync(event_store.update_event)(changed)

        (event,) = load(event_store)
        assert (event.title, event.capacity_total, event.capacity_remaining) == ("Blues Night", 50, 10)

    def test_update_status(self, event_store):
        async_to_sync(event_store.create_event)(new_event())
        (existing,) = load(event_store)

        async_to_sync(event_store.update_status)(existing.document_id, EventStatus.CANCELLED)

        (event,) = load(event_store)
        assert event.status is EventStatus.CANCELLED
        assert event.title == existing.title

    def test_legacy_document_keeps_extra_fields_on_update(self, event_store):
        EventDocument.objects.create(
            id="legacy",
            fields={"title": "Old Gala", "dateTime": "2025-05-01 10:00", "cancelled": True, "capacityTotal": "30"},
        )

        (event,) = load(event_store)
        assert event.event_id == "legacy"
        assert event.status is EventStatus.CANCELLED
        assert event.date_time_millis == MAY_FIRST_MILLIS
        assert event.capacity_remaining == 30

        async_to_sync(event_store.update_event)(
            new_event(document_id="legacy", event_id="legacy", title="Gala", status=event.status)
        )

        row = EventDocument.objects.get(pk="legacy")
        assert row.fields["cancelled"] is True
        assert row.fields["title"] == "Gala"
        assert row.fields["status"] == "CANCELLED"

    def test_malformed_document_is_skipped(self, event_store):
        EventDocument.objects.create(id="broken", fields=["not", "a", "document"])
        async_to_sync(event_store.create_event)(new_event())

        assert [event.title for event in load(event_store)] == ["Jazz Night"]

    def test_update_of_unknown_document_fails(self, event_store):
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_store.update_event)(new_event(document_id="ghost"))
        assert excinfo.value.message == "No document to update: events/ghost"

    def test_status_of_unknown_document_fails(self, event_store):
        with pytest.raises(EventStoreError) as excinfo:
            async_to_sync(event_store.update_status)("ghost", EventStatus.CANCELLED)
        assert excinfo.value.message == "No document to update: events/ghost"

    def test_update_without_document_id_is_invalid(self, event_store):
        with pytest.raises(InvalidEventError):
            async_to_sync(event_store.update_event)(new_event())


@pytest.mark.django_db
class TestDjangoAuthRepository:
    """Tests for DjangoAuthRepository."""

    def register(self, store, email="user@example.com", phone="+15145550100", password="password123"):
        return async_to_sync(store.register)(email, phone, password)

    def test_session_is_required(self):
        with pytest.raises(TypeError):
            DjangoAuthRepository(None)

    def test_register_creates_account_profile_and_index(self, auth_store):
        session = self.register(auth_store)

        assert session == AuthSession(email="user@example.com", role=UserRole.CUSTOMER)
        user = get_user_model().objects.get(username="user@example.com")
        assert user.profile.role == "CUSTOMER"
        assert user.profile.phone_e164 == "+15145550100"
        assert PhoneIndexEntry.objects.get(pk="+15145550100").email == "user@example.com"
        assert auth_store.is_signed_in()
        assert auth_store.get_signed_in_role() is UserRole.CUSTOMER

    def test_sign_in_by_email_and_phone(self, auth_store):
        self.register(auth_store)
        auth_store.sign_out()

        by_email = async_to_sync(auth_store.sign_in)("user@example.com", "password123")
        auth_store.sign_out()
        by_phone = async_to_sync(auth_store.sign_in)("+15145550100", "password123")

        assert by_email == by_phone == AuthSession("user@example.com", UserRole.CUSTOMER)
        assert auth_store.get_signed_in_email() == "user@example.com"

    def test_wrong_password(self, auth_store):
        self.register(auth_store)
        auth_store.sign_out()

        with pytest.raises(InvalidCredentialsError):
            async_to_sync(auth_store.sign_in)("user@example.com", "wrong-password")
        assert not auth_store.is_signed_in()

    def test_unknown_email_and_phone(self, auth_store):
        with pytest.raises(AccountNotFoundError):
            async_to_sync(auth_store.sign_in)("nobody@example.com", "password123")
        with pytest.raises(AccountNotFoundError):
            async_to_sync(auth_store.sign_in)("+15145550199", "password123")

    def test_missing_role_signs_out(self, auth_store):
        user = get_user_model().objects.create_user(
            username="user@example.com", email="user@example.com", password="password123"
        )
        UserProfile.objects.create(user=user, email=user.email, role="")

        with pytest.raises(MissingRoleError):
            async_to_sync(auth_store.sign_in)("user@example.com", "password123")

        assert not auth_store.is_signed_in()
        assert auth_store.get_signed_in_role() is None

    def test_account_without_profile_has_no_role(self, auth_store):
        get_user_model().objects.create_user(
            username="user@example.com", email="user@example.com", password="password123"
        )
        with pytest.raises(MissingRoleError):
            async_to_sync(auth_store.sign_in)("user@example.com", "password123")

    def test_admin_role_is_cached(self, auth_store):
        self.register(auth_store)
        UserProfile.objects.filter(email="user@example.com").update(role="ADMIN")
        auth_store.sign_out()

        session = async_to_sync(auth_store.sign_in)("user@example.com", "password123")

        assert session.role is UserRole.ADMIN
        assert auth_store.get_signed_in_role() is UserRole.ADMIN

    def test_phone_in_use_rolls_back_account(self, auth_store):
        self.register(auth_store, email="first@example.com")
        second = DjangoAuthRepository(SessionStore())

        with pytest.raises(PhoneInUseError):
            self.register(second, email="second@example.com")

        assert not get_user_model().objects.filter(username="second@example.com").exists()
        assert PhoneIndexEntry.objects.get(pk="+15145550100").email == "first@example.com"
        assert not second.is_signed_in()

    def test_duplicate_email(self, auth_store):
        self.register(auth_store)
        second = DjangoAuthRepository(SessionStore())

        with pytest.raises(AuthBackendError) as excinfo:
            self.register(second, phone="+15145550111")

        assert excinfo.value.message == "The email address is already in use by another account."
        assert not second.is_signed_in()

    def test_sign_out_clears_session_keys(self, auth_store):
        self.register(auth_store)

        auth_store.sign_out()

        assert not auth_store.is_signed_in()
        assert auth_store.get_signed_in_email() is None
        for key in (SIGNED_IN_UID_KEY, SIGNED_IN_EMAIL_KEY, SIGNED_IN_ROLE_KEY):
            assert key not in auth_store._session
