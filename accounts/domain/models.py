"""Domain models for accounts.

The Django ORM models are in accounts/models.py (persistence layer).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self


class UserRole(Enum):
    """Role that gates event management."""

    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"

    @classmethod
    def from_value(cls, raw: str | None) -> Self | None:
        """Parse a stored role, or None when it is not a known role."""
        if raw is None:
            return None
        normalized = raw.strip().upper()
        if normalized == "CUSTOMER":
            return cls.CUSTOMER
        if normalized in ("ADMIN", "ADMINISTRATOR"):
            return cls.ADMIN
        return None


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful sign-in or registration."""

    email: str
    role: UserRole
