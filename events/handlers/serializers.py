"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers

from events.domain import EventStatus


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    documentId = serializers.CharField(source="document_id")
    eventId = serializers.CharField(source="event_id")
    title = serializers.CharField()
    category = serializers.CharField()
    location = serializers.CharField()
    dateTimeMillis = serializers.IntegerField(source="date_time_millis")
    status = serializers.CharField(source="status.value")
    capacityTotal = serializers.IntegerField(source="capacity_total")
    capacityRemaining = serializers.IntegerField(source="capacity_remaining")


class EventFormSerializer(serializers.Serializer):
    """Input rules of the event create/edit form."""

    title = serializers.CharField(
        error_messages={"required": "Title is required", "blank": "Title is required"}
    )
    dateTimeMillis = serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": "Date and time are required",
            "min_value": "Date and time are required",
        },
    )
    category = serializers.CharField(
        error_messages={"required": "Category is required", "blank": "Category is required"}
    )
    location = serializers.CharField(
        error_messages={"required": "Location is required", "blank": "Location is required"}
    )
    capacityTotal = serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": "Total capacity is required",
            "min_value": "Total capacity must be greater than 0",
            "invalid": "Total capacity must be greater than 0",
        },
    )
    capacityRemaining = serializers.IntegerField(
        required=False,
        allow_null=True,
        min_value=0,
        error_messages={
            "min_value": "Remaining capacity cannot be negative",
            "invalid": "Remaining capacity cannot be negative",
        },
    )

    def validate(self, attrs):
        remaining = attrs.get("capacityRemaining")
        if remaining is None:
            attrs["capacityRemaining"] = attrs["capacityTotal"]
        elif remaining > attrs["capacityTotal"]:
            raise serializers.ValidationError(
                {"capacityRemaining": "Remaining capacity cannot exceed total capacity"}
            )
        return attrs


class EventStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[status.value for status in EventStatus])
