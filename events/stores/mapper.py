"""Mapping between stored event documents and domain Events.

Decoding is best-effort: every field has a fallback so that documents
written by older clients (string dates, a boolean ``cancelled`` flag,
capacities stored as text) still produce an Event.
"""

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

from django.utils import timezone

from events.domain.models import EPOCH, Event, EventStatus

FIELD_EVENT_ID = "eventId"
FIELD_TITLE = "title"
FIELD_CATEGORY = "category"
FIELD_LOCATION = "location"
FIELD_DATE_TIME = "dateTime"
FIELD_STATUS = "status"
FIELD_CAPACITY_TOTAL = "capacityTotal"
FIELD_CAPACITY_REMAINING = "capacityRemaining"
FIELD_CANCELLED_LEGACY = "cancelled"

# Tried in order, first match wins. %d also takes a one-digit day and the
# %B entries accept full month names.
DATE_TIME_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%dT%H:%M",
    "%d %b %Y %H:%M",
    "%d %B %Y %H:%M",
    "%d %b %Y at %H:%M:%S UTC%z",
    "%d %B %Y at %H:%M:%S UTC%z",
)

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_HOUR_ONLY_OFFSET = re.compile(r"(UTC[+-][0-9]{2})$")


def decode_event(document_id: str, data: dict[str, Any]) -> Event:
    """Build an Event from a stored document."""
    event_id = _text(data.get(FIELD_EVENT_ID)) or document_id

    raw_date_time = data.get(FIELD_DATE_TIME)
    date_time_millis = extract_epoch_millis(raw_date_time)
    if date_time_millis <= 0:
        date_time_millis = parse_date_time(_text(raw_date_time))

    raw_status = _text(data.get(FIELD_STATUS))
    if not raw_status:
        cancelled = data.get(FIELD_CANCELLED_LEGACY) is True
        raw_status = (EventStatus.CANCELLED if cancelled else EventStatus.ACTIVE).value

    capacity_total = parse_int(data.get(FIELD_CAPACITY_TOTAL), 0)
    capacity_remaining = parse_int(data.get(FIELD_CAPACITY_REMAINING), capacity_total)
    if capacity_total > 0 and capacity_remaining > capacity_total:
        capacity_remaining = capacity_total
    if capacity_remaining < 0:
        capacity_remaining = 0

    return Event(
        document_id=document_id,
        event_id=event_id,
        title=_text(data.get(FIELD_TITLE)),
        category=_text(data.get(FIELD_CATEGORY)),
        location=_text(data.get(FIELD_LOCATION)),
        date_time_millis=date_time_millis,
        status=EventStatus.from_value(raw_status),
        capacity_total=capacity_total,
        capacity_remaining=capacity_remaining,
    )


def encode_event(event: Event, event_id: str) -> dict[str, Any]:
    """Build the full write record for an event."""
    return {
        FIELD_EVENT_ID: event_id,
        FIELD_TITLE: event.title,
        FIELD_CATEGORY: event.category,
        FIELD_LOCATION: event.location,
        FIELD_DATE_TIME: EPOCH + timedelta(milliseconds=event.date_time_millis),
        FIELD_STATUS: event.status.value,
        FIELD_CAPACITY_TOTAL: event.capacity_total,
        FIELD_CAPACITY_REMAINING: event.capacity_remaining,
    }


def sort_events(events: list[Event]) -> list[Event]:
    """Most recent first; equal times keep their original order."""
    return sorted(events, key=lambda event: event.date_time_millis, reverse=True)


def extract_epoch_millis(value: Any) -> int:
    """Read a timestamp-typed value as epoch millis, or 0."""
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            value = timezone.make_aware(value)
        return (value - EPOCH) // timedelta(milliseconds=1)
    if isinstance(value, date):
        return extract_epoch_millis(datetime.combine(value, time.min))
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def parse_date_time(value: str) -> int:
    """Parse free-text dates written by older clients; 0 when none match.

    A format matches a leading part of the text: trailing seconds,
    fractions or a zone suffix after the last field are ignored. The
    longest matching prefix wins.
    """
    if not value:
        return 0
    # strptime wants at least hours and minutes in a UTC offset.
    value = _HOUR_ONLY_OFFSET.sub(r"\g<1>00", value)
    for date_format in DATE_TIME_FORMATS:
        parsed = _parse_prefix(value, date_format)
        if parsed is not None:
            return extract_epoch_millis(parsed)
    return 0


def _parse_prefix(value: str, date_format: str) -> datetime | None:
    for end in range(len(value), 0, -1):
        try:
            return datetime.strptime(value[:end], date_format)
        except ValueError:
            continue
    return None


def parse_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        return int(text) if _INTEGER_TEXT.fullmatch(text) else default
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()
