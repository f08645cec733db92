"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - Population and ownership rules see entities only through these Protocols
    - Implementations provided by shell (ORM models, content store)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in store Protocols: implementations do IO, core functions that
      consume the loaded rows stay synchronous
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from app.core.domain_types import CategoryId, PostId, UserId


class UserLike(Protocol):
    """Structural contract for a stored user."""
    id: UUID
    username: str
    email: str
    password_hash: str
    created_at: datetime


class CategoryLike(Protocol):
    """Structural contract for a stored category."""
    id: UUID
    name: str
    description: str
    slug: str
    created_at: datetime
    updated_at: datetime


class CommentLike(Protocol):
    """Structural contract for a comment owned by a post."""
    id: UUID
    content: str
    author_id: UUID | None
    created_at: datetime


class PostLike(Protocol):
    """Structural contract for a stored post with its comments loaded."""
    id: UUID
    title: str
    content: str
    excerpt: str | None
    category_id: UUID | None
    author_id: UUID | None
    tags: list
    is_published: bool
    view_count: int
    created_at: datetime
    updated_at: datetime
    comments: list


class UserRepository(Protocol):
    """Contract for user persistence: implemented by shell."""
    async def get_user(self, user_id: UserId) -> UserLike | None: ...
    async def find_user_by_identifier(self, identifier: str) -> UserLike | None: ...
    async def username_or_email_taken(self, username: str, email: str) -> str | None: ...
    async def insert_user(
        self, username: str, email: str, password_hash: str,
    ) -> UserLike: ...


class CategoryRepository(Protocol):
    """Contract for category persistence: implemented by shell."""
    async def find_categories(self) -> list[CategoryLike]: ...
    async def get_category(self, category_id: CategoryId) -> CategoryLike | None: ...
    async def get_category_by_slug(self, slug: str) -> CategoryLike | None: ...
    async def insert_category(self, name: str, description: str) -> CategoryLike: ...
    async def update_category(
        self, category_id: CategoryId, name: str | None, description: str | None,
    ) -> CategoryLike | None: ...
    async def delete_category(self, category_id: CategoryId) -> None: ...


class PostRepository(Protocol):
    """Contract for post persistence: implemented by shell."""
    async def find_posts(
        self, post_filter: dict, page: int, page_size: int,
    ) -> list[dict]: ...
    async def find_post_by_id(self, post_id: PostId) -> dict | None: ...
    async def get_post_row(self, post_id: PostId) -> PostLike | None: ...
    async def insert_post(self, data: dict, author_id: UserId) -> dict: ...
    async def update_post(self, post_id: PostId, patch: dict) -> dict | None: ...
    async def delete_post(self, post_id: PostId) -> None: ...
    async def increment_views(self, post_id: PostId) -> None: ...
    async def append_comment(
        self, post_id: PostId, author_id: UserId, content: str,
    ) -> dict | None: ...
