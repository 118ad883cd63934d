from accounts.domain.errors import (
    AccountNotFoundError,
    AuthBackendError,
    AuthValidationError,
    DomainError,
    ErrorCode,
    InvalidCredentialsError,
    MissingRoleError,
    PhoneInUseError,
)
from accounts.domain.models import AuthSession, UserRole
from accounts.domain.phone import normalize_phone

__all__ = [
    "AuthSession",
    "UserRole",
    "normalize_phone",
    "DomainError",
    "ErrorCode",
    "AccountNotFoundError",
    "AuthBackendError",
    "AuthValidationError",
    "InvalidCredentialsError",
    "MissingRoleError",
    "PhoneInUseError",
]
