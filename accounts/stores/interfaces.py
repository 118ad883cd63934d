"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from accounts.domain import AuthSession, UserRole

# Key of the cached role in the client's key-value store.
SIGNED_IN_ROLE_KEY = "signed_in_role"


class AuthRepository(ABC):
    """Interface for credential and role operations."""

    @abstractmethod
    async def sign_in(self, identifier: str, password: str) -> AuthSession:
        """Authenticate by email or E.164 phone and resolve the account's role.

        Raises:
            AccountNotFoundError: If the identifier matches no account.
            InvalidCredentialsError: If the password is wrong.
            MissingRoleError: If the account has no role; the session is signed out.
            AuthBackendError: If the store fails.
        """
        ...

    @abstractmethod
    async def register(self, email: str, phone_e164: str, password: str) -> AuthSession:
        """Create a CUSTOMER account with its profile and phone index entry.

        Raises:
            PhoneInUseError: If the phone number is already indexed.
            AuthBackendError: If the credential or the profile cannot be written.
        """
        ...

    @abstractmethod
    def is_signed_in(self) -> bool:
        ...

    @abstractmethod
    def get_signed_in_email(self) -> str | None:
        ...

    @abstractmethod
    def get_signed_in_role(self) -> UserRole | None:
        """Return the cached role of the last successful authentication."""
        ...

    @abstractmethod
    def sign_out(self) -> None:
        """End the session and clear the cached role."""
        ...
