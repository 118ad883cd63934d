"""Composition root: builds services with their production stores.

Views receive these factories through ``as_view(...)`` in the URLconf;
tests pass their own factories returning services over in-memory stores.
"""

from accounts.services.auth_service import AuthService
from accounts.stores.django_store import DjangoAuthRepository
from events.services.event_service import EventService
from events.stores.django_store import DjangoEventRepository


def build_auth_service(request) -> AuthService:
    return AuthService(DjangoAuthRepository(request.session))


def build_event_service(request) -> EventService:
    return EventService(DjangoEventRepository())
