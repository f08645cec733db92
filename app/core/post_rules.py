"""Post Rules: field validation, patch filtering, tag parsing and ownership for posts.

Invariants:
    - Pure functions: no IO, no async, no DB
    - title >= 3 chars, content >= 10 chars, excerpt <= 200 chars (after trimming)
    - author_id is never patchable; only PATCHABLE_FIELDS survive clean_patch()
    - Tags keep submission order and duplicates (no dedup)
    - Drafts are visible to their author only

Design Decisions:
    - Tags accepted as list or comma-separated string: the web client sends both shapes
    - Ownership lives here, not in the gate: the post must be loaded before its owner is known
"""

from uuid import UUID

from app.core.domain_types import Identity
from app.core.errors import ForbiddenError, ValidationError

TITLE_MIN_LENGTH = 3
CONTENT_MIN_LENGTH = 10
EXCERPT_MAX_LENGTH = 200
PREVIEW_LENGTH = 150

PATCHABLE_FIELDS = frozenset({
    "title", "content", "excerpt", "category_id", "tags", "is_published",
})


def normalize_tags(raw: list[str] | str | None) -> list[str]:
    """Split/trim tags, dropping empties. "a, b, b" -> ["a", "b", "b"]."""
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [tag.strip() for tag in raw if tag and tag.strip()]


def validate_post_fields(fields: dict, partial: bool = False) -> dict:
    """Trim and check post fields. With partial=True, absent fields are skipped."""
    cleaned = dict(fields)

    if "title" in cleaned or not partial:
        title = (cleaned.get("title") or "").strip()
        if len(title) < TITLE_MIN_LENGTH:
            raise ValidationError(
                f"Title must be at least {TITLE_MIN_LENGTH} characters",
                field="title",
            )
        cleaned["title"] = title

    if "content" in cleaned or not partial:
        content = (cleaned.get("content") or "").strip()
        if len(content) < CONTENT_MIN_LENGTH:
            raise ValidationError(
                f"Content must be at least {CONTENT_MIN_LENGTH} characters",
                field="content",
            )
        cleaned["content"] = content

    if cleaned.get("excerpt") is not None:
        excerpt = cleaned["excerpt"].strip()
        if len(excerpt) > EXCERPT_MAX_LENGTH:
            raise ValidationError(
                f"Excerpt cannot be more than {EXCERPT_MAX_LENGTH} characters",
                field="excerpt",
            )
        cleaned["excerpt"] = excerpt or None

    if "category_id" in cleaned or not partial:
        if cleaned.get("category_id") is None:
            raise ValidationError("Category is required", field="category")

    if "tags" in cleaned:
        cleaned["tags"] = normalize_tags(cleaned["tags"])

    if "is_published" in cleaned and cleaned["is_published"] is None:
        cleaned.pop("is_published")

    return cleaned


def clean_patch(patch: dict) -> dict:
    """Keep only patchable fields; author and id are silently dropped."""
    return {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS}


def preview_excerpt(excerpt: str | None, content: str) -> str:
    """Stored excerpt, or the first PREVIEW_LENGTH chars of content."""
    if excerpt:
        return excerpt
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH].rstrip() + "..."


def check_ownership(author_id: UUID | None, identity: Identity, post_id: UUID) -> None:
    if author_id != identity.id:
        raise ForbiddenError("Post", str(post_id))


def can_view(is_published: bool, author_id: UUID | None, viewer: Identity | None) -> bool:
    if is_published:
        return True
    return viewer is not None and author_id == viewer.id


def validate_comment_content(content: str | None) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment cannot be empty", field="content")
    return content
