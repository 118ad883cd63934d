"""Identifier shape checks."""

import re

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+")


def is_email_identifier(identifier: str) -> bool:
    """Identifiers containing ``@`` are treated as emails, everything else as phones."""
    return "@" in identifier


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None
