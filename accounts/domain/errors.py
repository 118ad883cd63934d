"""Domain error codes for the accounts module."""

from dataclasses import dataclass
from enum import Enum

SIGN_IN_FAILED_MESSAGE = "Sign in failed"
REGISTRATION_FAILED_MESSAGE = "Registration failed"
INVALID_CREDENTIALS_MESSAGE = "Wrong email or password. Please try again."
ACCOUNT_NOT_FOUND_MESSAGE = "No account found for this account."
PHONE_IN_USE_MESSAGE = "Phone number is already in use."
MISSING_ROLE_MESSAGE = "No role assigned to this account. Please contact support."
PROFILE_SAVE_FAILED_MESSAGE = "Account created, but role setup failed. Please try again."
EMAIL_IN_USE_MESSAGE = "The email address is already in use by another account."


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION = "VALIDATION"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    MISSING_ROLE = "MISSING_ROLE"
    PHONE_IN_USE = "PHONE_IN_USE"
    BACKEND = "BACKEND"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthValidationError(DomainError):
    """Raised when sign-in or registration input is rejected before any lookup."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION, message=message)


class InvalidCredentialsError(DomainError):
    """Raised when the password does not match the account."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIALS, message=INVALID_CREDENTIALS_MESSAGE)


class AccountNotFoundError(DomainError):
    """Raised when an email or phone number resolves to no account."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ACCOUNT_NOT_FOUND, message=ACCOUNT_NOT_FOUND_MESSAGE)


class MissingRoleError(DomainError):
    """Raised when credentials are valid but the account has no usable role."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.MISSING_ROLE, message=MISSING_ROLE_MESSAGE)


class PhoneInUseError(DomainError):
    """Raised when registering a phone number that is already indexed."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.PHONE_IN_USE, message=PHONE_IN_USE_MESSAGE)


class AuthBackendError(DomainError):
    """Raised when the account store itself fails."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.BACKEND, message=message)


def resolve_error_message(error: BaseException | None, fallback: str) -> str:
    """Return the backend's own message when it has one, else the fallback."""
    message = "" if error is None else str(error).strip()
    return message or fallback
