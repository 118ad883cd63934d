"""Django ORM models (persistence layer).

Events are stored as documents: a key, a native timestamp column for
``dateTime`` and a JSON object for every other field, so that records
written by older clients keep whatever shape they were written with.
Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


def new_document_id() -> str:
    return uuid.uuid4().hex[:20]


class EventDocument(models.Model):
    """Persistence model for event documents."""

    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)
    date_time = models.DateTimeField(blank=True, null=True)
    fields = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        title = self.fields.get("title") if isinstance(self.fields, dict) else None
        return title or self.id
