"""User Rules: registration shape checks.

Invariants:
    - Pure functions: no IO, no async, no DB
    - username: 3-30 word characters; email: lowercased, one "@", dotted domain
    - password length checked here; the plaintext is never returned in an error message

Design Decisions:
    - Uniqueness is NOT checked here (needs IO): the credential service owns it
"""

import re

from app.core.errors import ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6

_USERNAME = re.compile(r"^\w+$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_registration(
    username: str | None, email: str | None, password: str | None,
) -> tuple[str, str]:
    """Return normalized (username, email) or raise ValidationError."""
    username = (username or "").strip()
    if not (USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH):
        raise ValidationError(
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters",
            field="username",
        )
    if not _USERNAME.match(username):
        raise ValidationError(
            "Username may only contain letters, digits and underscores",
            field="username",
        )

    email = (email or "").strip().lower()
    if not _EMAIL.match(email):
        raise ValidationError("Please provide a valid email", field="email")

    if len(password or "") < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            field="password",
        )
    return username, email
