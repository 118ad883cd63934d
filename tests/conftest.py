"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient, APIRequestFactory

from accounts.services.auth_service import AuthService
from accounts.stores.memory_store import InMemoryAuthRepository
from events.services.event_service import EventService
from events.stores.memory_store import InMemoryEventRepository


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def request_factory() -> APIRequestFactory:
    return APIRequestFactory()


@pytest.fixture
def auth_repository() -> InMemoryAuthRepository:
    return InMemoryAuthRepository()


@pytest.fixture
def auth_service(auth_repository: InMemoryAuthRepository) -> AuthService:
    return AuthService(auth_repository)


@pytest.fixture
def event_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def event_service(event_repository: InMemoryEventRepository) -> EventService:
    return EventService(event_repository)
