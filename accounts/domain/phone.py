"""Phone number canonicalization to E.164."""

import re

_SEPARATORS = re.compile(r"[ \-()]")
_DIGITS = re.compile(r"[0-9]+")


def normalize_phone(raw: str | None) -> str | None:
    """Return ``raw`` in E.164 form, or None if it cannot be read as a phone.

    Spaces, hyphens and parentheses are dropped. A leading ``+`` must be
    followed by 8 to 15 digits. Without it only North American numbers are
    accepted: 10 digits get ``+1``, 11 digits starting with 1 get ``+``.
    """
    if raw is None:
        return None
    value = _SEPARATORS.sub("", raw.strip())
    if value.startswith("+"):
        digits = value[1:]
        if _DIGITS.fullmatch(digits) and 8 <= len(digits) <= 15:
            return value
        return None
    if not _DIGITS.fullmatch(value):
        return None
    if len(value) == 10:
        return "+1" + value
    if len(value) == 11 and value.startswith("1"):
        return "+" + value
    return None
