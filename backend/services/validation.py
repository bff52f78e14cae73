"""
Eager input validation.

Everything here runs before any store call, so a ValidationError never
leaves a partial write behind.
"""

import re

from errors import ValidationError

USERNAME_PATTERN = re.compile(r"[a-z0-9_-]{3,20}")
USERNAME_RULE = (
    "Username must be 3-20 characters, lowercase letters, numbers, "
    "underscores, or hyphens only."
)
ALLOWED_LINK_PREFIXES = ("http://", "https://")


def validate_link(link: str | None) -> str:
    if not link or not link.strip():
        raise ValidationError("Missing required field: link")
    link = link.strip()
    if not link.startswith(ALLOWED_LINK_PREFIXES):
        raise ValidationError("Link must start with http:// or https://")
    return link


def require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Missing required field: {field}")
    return value.strip()


def clean_note(note: str | None) -> str | None:
    if note is None:
        return None
    return note.strip() or None


def validate_username(username: str | None) -> str:
    if not username or not USERNAME_PATTERN.fullmatch(username):
        raise ValidationError(USERNAME_RULE)
    return username
