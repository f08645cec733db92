"""Category Rules: slug derivation and field validation for categories.

Invariants:
    - Pure functions: no IO, no async, no DB
    - slug = lowercase name, ASCII non-word characters (except spaces) stripped, space runs → "-"
    - url is always derived from slug, never stored
    - A name that yields an empty slug is rejected (slug must stay unique and addressable)

Design Decisions:
    - re.ASCII on the strip pattern: "\\w" matches the same characters browsers
      send back in /categories/{slug} links
    - Name uniqueness is exact-string; case-insensitive duplicates are allowed
"""

import re

from app.core.errors import ValidationError

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200

_NON_WORD = re.compile(r"[^\w ]+", re.ASCII)
_SPACES = re.compile(r" +")


def slugify(name: str) -> str:
    """Derive the URL slug for a category name."""
    return _SPACES.sub("-", _NON_WORD.sub("", name.lower()))


def category_url(slug: str) -> str:
    return f"/categories/{slug}"


def validate_category_fields(
    name: str | None, description: str | None,
) -> tuple[str, str]:
    """Return (name, description) trimmed and checked, or raise ValidationError."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please provide a category name", field="name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Category name must be under {NAME_MAX_LENGTH} characters",
            field="name",
        )
    if not slugify(name):
        raise ValidationError(
            "Category name must contain at least one letter or digit",
            field="name",
        )
    description = description or ""
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description can be max {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )
    return name, description
