"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CategoryId, PostId, CommentId wrap UUIDs: never use bare UUID in domain logic
    - Identity is immutable once resolved by the authorization gate
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CategoryId = NewType("CategoryId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, attached to the request by the gate."""
    id: UserId
    username: str


# ─── Enums ───────────────────────────────────────────────────────

class PostStatus(str, Enum):
    """Post lifecycle: maps to the `is_published` flag."""
    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def of(cls, is_published: bool) -> "PostStatus":
        return cls.PUBLISHED if is_published else cls.DRAFT
