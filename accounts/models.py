"""Django ORM models (persistence layer).

Credentials are Django auth users (username = email). The profile carries the
role; the phone index resolves an E.164 number to the account's email.
"""

from django.conf import settings
from django.db import models

from accounts.domain import UserRole


class UserProfile(models.Model):
    """Persistence model for a user profile, keyed by account id."""

    ROLE_CHOICES = [(role.value, role.name.title()) for role in UserRole]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="profile",
    )
    email = models.EmailField()
    phone_e164 = models.CharField(max_length=16, blank=True)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["email"]

    def __str__(self) -> str:
        return f"{self.email} ({self.role or 'no role'})"


class PhoneIndexEntry(models.Model):
    """Persistence model for the phone number to account index."""

    phone_e164 = models.CharField(primary_key=True, max_length=16)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="phone_index_entries",
    )
    email = models.EmailField()

    class Meta:
        verbose_name_plural = "phone index entries"

    def __str__(self) -> str:
        return f"{self.phone_e164} -> {self.email}"
