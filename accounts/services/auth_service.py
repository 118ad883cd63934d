"""Auth service - input validation and normalization in front of the AuthRepository.

Validation runs before any lookup, stops at the first failing rule and is
reported as AuthValidationError. Whatever the repository returns or raises
is passed through unchanged.
"""

import logging

from accounts.domain import AuthSession, AuthValidationError, UserRole, normalize_phone
from accounts.domain.validators import is_email_identifier, is_valid_email
from accounts.stores.interfaces import AuthRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Service for sign-in and registration."""

    def __init__(self, repository: AuthRepository) -> None:
        if repository is None:
            raise TypeError("repository cannot be None")
        self._repository = repository

    async def sign_in(self, identifier: str | None, password: str | None) -> AuthSession:
        """Sign in with an email or a phone number.

        Raises:
            AuthValidationError: If the input is rejected; the repository is not called.
        """
        normalized = self.validate_sign_in(identifier, password)
        session = await self._repository.sign_in(normalized, password)
        logger.info("Signed in %s as %s", session.email, session.role.value)
        return session

    async def register(
        self,
        email: str | None,
        phone: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> AuthSession:
        """Register a CUSTOMER account.

        Raises:
            AuthValidationError: If the input is rejected; the repository is not called.
        """
        normalized_email, phone_e164 = self.validate_registration(
            email, phone, password, confirm_password
        )
        session = await self._repository.register(normalized_email, phone_e164, password)
        logger.info("Registered %s", session.email)
        return session

    def is_signed_in(self) -> bool:
        return self._repository.is_signed_in()

    def get_signed_in_email(self) -> str | None:
        return self._repository.get_signed_in_email()

    def get_signed_in_role(self) -> UserRole | None:
        return self._repository.get_signed_in_role()

    def sign_out(self) -> None:
        self._repository.sign_out()

    @staticmethod
    def validate_sign_in(identifier: str | None, password: str | None) -> str:
        """Return the normalized identifier: a lower-cased email or an E.164 phone."""
        identifier = _trim(identifier)
        if not identifier:
            raise AuthValidationError("Email or phone is required")
        if is_email_identifier(identifier):
            if not is_valid_email(identifier):
                raise AuthValidationError("Please enter a valid email")
            normalized = identifier.lower()
        else:
            normalized = normalize_phone(identifier)
            if normalized is None:
                raise AuthValidationError("Please enter a valid phone number")
        _check_password_present(password)
        return normalized

    @staticmethod
    def validate_registration(
        email: str | None,
        phone: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> tuple[str, str]:
        """Return the normalized (email, E.164 phone) pair."""
        email = _trim(email)
        if not email:
            raise AuthValidationError("Email is required")
        if not is_valid_email(email):
            raise AuthValidationError("Please enter a valid email")

        # A malformed number reads as a missing one.
        phone_e164 = normalize_phone(_trim(phone))
        if not phone_e164 or not phone_e164.startswith("+"):
            raise AuthValidationError("Phone number is required")

        _check_password_present(password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not confirm_password:
            raise AuthValidationError("Please confirm your password")
        if password != confirm_password:
            raise AuthValidationError("Passwords do not match")
        return email.lower(), phone_e164


def _check_password_present(password: str | None) -> None:
    if not password:
        raise AuthValidationError("Password is required")


def _trim(value: str | None) -> str:
    return "" if value is None else value.strip()
