"""Post Schemas: Pydantic models for post and comment API boundaries.

Invariants:
    - PostCreate: title >= 3, content >= 10, excerpt <= 200, category required
    - PostUpdate: every field optional; author/id are not fields, so clients cannot send them through
    - tags accept a list or a comma-separated string
    - Responses never expose author email or password hash

Design Decisions:
    - Length limits reuse core/post_rules.py constants: one source for API and store checks
    - extra="ignore" on input: a stray "author" key is dropped, not rejected
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.entity_ids import parse_entity_id
from app.core.post_rules import (
    CONTENT_MIN_LENGTH, EXCERPT_MAX_LENGTH, TITLE_MIN_LENGTH,
)


class PostCreate(BaseModel):
    """Post creation body."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=TITLE_MIN_LENGTH)
    content: str = Field(min_length=CONTENT_MIN_LENGTH)
    excerpt: str | None = Field(None, max_length=EXCERPT_MAX_LENGTH)
    category: str
    tags: list[str] | str | None = None
    is_published: bool = False

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude={"category"})
        fields["category_id"] = parse_entity_id(self.category, "Category")
        return fields


class PostUpdate(BaseModel):
    """Partial post update body; only sent fields are merged."""
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(None, min_length=TITLE_MIN_LENGTH)
    content: str | None = Field(None, min_length=CONTENT_MIN_LENGTH)
    excerpt: str | None = Field(None, max_length=EXCERPT_MAX_LENGTH)
    category: str | None = None
    tags: list[str] | str | None = None
    is_published: bool | None = None

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude_unset=True, exclude={"category"})
        if self.category is not None:
            fields["category_id"] = parse_entity_id(self.category, "Category")
        return fields


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)


class AuthorSummary(BaseModel):
    id: str
    username: str


class CategorySummary(BaseModel):
    id: str
    name: str
    slug: str
    url: str


class CommentResponse(BaseModel):
    id: str
    content: str
    author: AuthorSummary | None
    created_at: datetime


class PostResponse(BaseModel):
    """Full post with resolved author, category and comments."""
    id: str
    title: str
    content: str
    excerpt: str | None
    category: CategorySummary | None
    author: AuthorSummary | None
    tags: list[str]
    is_published: bool
    status: str
    view_count: int
    comments: list[CommentResponse]
    created_at: datetime
    updated_at: datetime


class PostSummaryResponse(BaseModel):
    """Listing entry: preview excerpt, comment count, no body."""
    id: str
    title: str
    excerpt: str
    category: CategorySummary | None
    author: AuthorSummary | None
    tags: list[str]
    is_published: bool
    status: str
    view_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
