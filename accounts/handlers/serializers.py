"""Serializers for auth requests and sessions.

Request serializers only coerce shapes; the rules live in AuthService so
that error precedence stays in one place.
"""

from rest_framework import serializers


def _text_field() -> serializers.CharField:
    return serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default="", trim_whitespace=False
    )


class SignInSerializer(serializers.Serializer):
    identifier = _text_field()
    password = _text_field()


class RegisterSerializer(serializers.Serializer):
    email = _text_field()
    phone = _text_field()
    password = _text_field()
    confirmPassword = _text_field()


class AuthSessionSerializer(serializers.Serializer):
    """Serializer for the AuthSession domain model."""

    email = serializers.CharField()
    role = serializers.CharField(source="role.value")
