"""In-memory implementation of the AuthRepository, used by tests."""

import itertools
from dataclasses import dataclass
from typing import Any

from accounts.domain import (
    AccountNotFoundError,
    AuthBackendError,
    AuthSession,
    InvalidCredentialsError,
    MissingRoleError,
    PhoneInUseError,
    UserRole,
)
from accounts.domain.errors import EMAIL_IN_USE_MESSAGE, PROFILE_SAVE_FAILED_MESSAGE
from accounts.domain.validators import is_email_identifier
from accounts.stores.interfaces import SIGNED_IN_ROLE_KEY, AuthRepository


@dataclass
class _Account:
    uid: str
    email: str
    password: str


class InMemoryAuthRepository(AuthRepository):
    """Dict-backed account store with the same rules as the database store.

    ``role_store`` plays the client's key-value store. ``calls`` records every
    sign_in/register so tests can assert that validation stopped a request.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, _Account] = {}
        self.profiles: dict[str, dict[str, Any]] = {}
        self.phone_index: dict[str, dict[str, str]] = {}
        self.role_store: dict[str, str] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.fail_profile_write = False
        self._current: _Account | None = None
        self._uids = itertools.count(1)

    def add_account(
        self,
        email: str,
        password: str,
        phone_e164: str | None = None,
        role: UserRole | str | None = UserRole.CUSTOMER,
    ) -> str:
        """Seed an account; a role of None leaves the profile without one."""
        uid = f"uid-{next(self._uids)}"
        self.accounts[email] = _Account(uid=uid, email=email, password=password)
        self.profiles[uid] = {
            "email": email,
            "phone_e164": phone_e164 or "",
            "role": role.value if isinstance(role, UserRole) else role,
        }
        if phone_e164:
            self.phone_index[phone_e164] = {"uid": uid, "email": email}
        return uid

    async def sign_in(self, identifier: str, password: str) -> AuthSession:
        self.calls.append(("sign_in", (identifier, password)))
        email = identifier
        if not is_email_identifier(identifier):
            entry = self.phone_index.get(identifier)
            if not entry or not entry.get("email", "").strip():
                raise AccountNotFoundError()
            email = entry["email"]

        account = self.accounts.get(email)
        if account is None:
            raise AccountNotFoundError()
        if account.password != password:
            raise InvalidCredentialsError()
        self._current = account

        role = UserRole.from_value(self.profiles.get(account.uid, {}).get("role"))
        if role is None:
            self.sign_out()
            raise MissingRoleError()
        self.role_store[SIGNED_IN_ROLE_KEY] = role.value
        return AuthSession(email=account.email, role=role)

    async def register(self, email: str, phone_e164: str, password: str) -> AuthSession:
        self.calls.append(("register", (email, phone_e164, password)))
        if email in self.accounts:
            raise AuthBackendError(EMAIL_IN_USE_MESSAGE)
        account = _Account(uid=f"uid-{next(self._uids)}", email=email, password=password)
        self.accounts[email] = account
        self._current = account

        error: Exception | None = None
        if phone_e164 in self.phone_index:
            error = PhoneInUseError()
        elif self.fail_profile_write:
            error = AuthBackendError(PROFILE_SAVE_FAILED_MESSAGE)
        if error is not None:
            del self.accounts[email]
            self.sign_out()
            raise error

        role = UserRole.CUSTOMER
        self.profiles[account.uid] = {"email": email, "phone_e164": phone_e164, "role": role.value}
        self.phone_index[phone_e164] = {"uid": account.uid, "email": email}
        self.role_store[SIGNED_IN_ROLE_KEY] = role.value
        return AuthSession(email=email, role=role)

    def is_signed_in(self) -> bool:
        return self._current is not None

    def get_signed_in_email(self) -> str | None:
        return self._current.email if self._current else None

    def get_signed_in_role(self) -> UserRole | None:
        return UserRole.from_value(self.role_store.get(SIGNED_IN_ROLE_KEY))

    def sign_out(self) -> None:
        self._current = None
        self.role_store.pop(SIGNED_IN_ROLE_KEY, None)
