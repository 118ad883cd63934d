"""Django implementation of the AuthRepository.

Credentials are checked with django.contrib.auth; profiles and the phone
index are ORM models. The signed-in account and the cached role live in a
Django session, the client's key-value store.
"""

import logging

from asgiref.sync import sync_to_async
from django.contrib.auth import authenticate, get_user_model
from django.contrib.sessions.backends.base import SessionBase
from django.db import DatabaseError, IntegrityError, transaction

from accounts.domain import (
    AccountNotFoundError,
    AuthBackendError,
    AuthSession,
    InvalidCredentialsError,
    MissingRoleError,
    PhoneInUseError,
    UserRole,
)
from accounts.domain.errors import (
    EMAIL_IN_USE_MESSAGE,
    PROFILE_SAVE_FAILED_MESSAGE,
    REGISTRATION_FAILED_MESSAGE,
    SIGN_IN_FAILED_MESSAGE,
    resolve_error_message,
)
from accounts.domain.validators import is_email_identifier
from accounts.models import PhoneIndexEntry, UserProfile
from accounts.stores.interfaces import SIGNED_IN_ROLE_KEY, AuthRepository

logger = logging.getLogger(__name__)

SIGNED_IN_UID_KEY = "signed_in_uid"
SIGNED_IN_EMAIL_KEY = "signed_in_email"


class DjangoAuthRepository(AuthRepository):
    """Database-backed account store bound to one client's session."""

    def __init__(self, session: SessionBase) -> None:
        if session is None:
            raise TypeError("session cannot be None")
        self._session = session

    async def sign_in(self, identifier: str, password: str) -> AuthSession:
        return await sync_to_async(self._sign_in)(identifier, password)

    async def register(self, email: str, phone_e164: str, password: str) -> AuthSession:
        return await sync_to_async(self._register)(email, phone_e164, password)

    def is_signed_in(self) -> bool:
        return SIGNED_IN_UID_KEY in self._session

    def get_signed_in_email(self) -> str | None:
        return self._session.get(SIGNED_IN_EMAIL_KEY)

    def get_signed_in_role(self) -> UserRole | None:
        return UserRole.from_value(self._session.get(SIGNED_IN_ROLE_KEY))

    def sign_out(self) -> None:
        for key in (SIGNED_IN_UID_KEY, SIGNED_IN_EMAIL_KEY, SIGNED_IN_ROLE_KEY):
            self._session.pop(key, None)

    def _sign_in(self, identifier: str, password: str) -> AuthSession:
        email = identifier
        if not is_email_identifier(identifier):
            email = self._resolve_phone(identifier)

        user = self._authenticate(email, password)
        self._start_session(user)
        email = user.email or email

        try:
            raw_role = (
                UserProfile.objects.filter(user=user).values_list("role", flat=True).first()
            )
        except DatabaseError as exc:
            logger.error("Reading the profile of %s failed: %s", email, exc)
            self.sign_out()
            raise AuthBackendError(SIGN_IN_FAILED_MESSAGE) from exc

        role = UserRole.from_value(raw_role)
        if role is None:
            logger.warning("Account %s has no role; signing it out", email)
            self.sign_out()
            raise MissingRoleError()
        self._session[SIGNED_IN_ROLE_KEY] = role.value
        return AuthSession(email=email, role=role)

    def _resolve_phone(self, phone_e164: str) -> str:
        try:
            entry = PhoneIndexEntry.objects.filter(pk=phone_e164).first()
        except DatabaseError as exc:
            logger.error("Phone lookup failed: %s", exc)
            raise AuthBackendError(SIGN_IN_FAILED_MESSAGE) from exc
        if entry is None or not entry.email.strip():
            raise AccountNotFoundError()
        return entry.email

    def _authenticate(self, email: str, password: str):
        try:
            user = authenticate(username=email, password=password)
            if user is not None:
                return user
            known = get_user_model().objects.filter(username=email).exists()
        except DatabaseError as exc:
            raise AuthBackendError(resolve_error_message(exc, SIGN_IN_FAILED_MESSAGE)) from exc
        if not known:
            raise AccountNotFoundError()
        raise InvalidCredentialsError()

    def _register(self, email: str, phone_e164: str, password: str) -> AuthSession:
        user_model = get_user_model()
        try:
            with transaction.atomic():
                if user_model.objects.filter(username=email).exists():
                    raise AuthBackendError(EMAIL_IN_USE_MESSAGE)
                user = user_model.objects.create_user(username=email, email=email, password=password)
        except IntegrityError as exc:
            raise AuthBackendError(EMAIL_IN_USE_MESSAGE) from exc
        except DatabaseError as exc:
            raise AuthBackendError(resolve_error_message(exc, REGISTRATION_FAILED_MESSAGE)) from exc
        self._start_session(user)

        role = UserRole.CUSTOMER
        try:
            with transaction.atomic():
                if PhoneIndexEntry.objects.select_for_update().filter(pk=phone_e164).exists():
                    raise PhoneInUseError()
                UserProfile.objects.create(
                    user=user, email=email, phone_e164=phone_e164, role=role.value
                )
                PhoneIndexEntry.objects.create(phone_e164=phone_e164, user=user, email=email)
        except (PhoneInUseError, DatabaseError) as exc:
            logger.warning("Rolling back registration of %s: %s", email, exc)
            user.delete()
            self.sign_out()
            if isinstance(exc, (PhoneInUseError, IntegrityError)):
                raise PhoneInUseError() from exc
            raise AuthBackendError(PROFILE_SAVE_FAILED_MESSAGE) from exc

        self._session[SIGNED_IN_ROLE_KEY] = role.value
        return AuthSession(email=email, role=role)

    def _start_session(self, user) -> None:
        if self._session.session_key:
            self._session.cycle_key()
        self._session[SIGNED_IN_UID_KEY] = str(user.pk)
        self._session[SIGNED_IN_EMAIL_KEY] = user.email
