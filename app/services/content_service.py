"""Content Service: use-case orchestration for posts, comments and categories.

Invariants:
    - The single place that decides which domain error a caller sees
    - Mutations take a resolved Identity; author is always identity.id, never client input
    - Ownership (ForbiddenError) checked after the post is loaded; NotFound takes precedence
    - A draft is NotFound for everyone except its author, for reads and comments alike
    - get_post() bumps view_count only on a successful, visible read

Design Decisions:
    - Category filter accepts an id or a slug; an unknown category yields an empty page
    - Malformed ids resolve to NotFound (core/entity_ids.py), same as unknown ids
"""

import logging

from app.core.domain_types import CategoryId, Identity, PostId
from app.core.entity_ids import parse_entity_id, try_parse_uuid
from app.core.errors import ResourceNotFoundError, ValidationError
from app.core.post_rules import can_view, check_ownership, clean_patch
from app.core.repository_protocols import (
    CategoryLike, CategoryRepository, PostRepository,
)
from app.core.search_posts import parse_search_terms

logger = logging.getLogger(__name__)


class ContentService:
    """Post/comment/category use cases composed over the content store."""

    def __init__(
        self,
        posts: PostRepository,
        categories: CategoryRepository,
        page_size: int = 10,
        max_page_size: int = 50,
    ):
        self._posts = posts
        self._categories = categories
        self._page_size = page_size
        self._max_page_size = max_page_size

    # ─── Reads ───────────────────────────────────────────────────

    async def list_posts(
        self,
        viewer: Identity | None = None,
        page: int = 1,
        limit: int | None = None,
        category: str | None = None,
        query: str | None = None,
    ) -> list[dict]:
        """Newest-first page of summaries; ranked by relevance when query is given."""
        if page < 1:
            raise ValidationError("page must be >= 1", field="page")
        limit = self._page_size if limit is None else limit
        if not (1 <= limit <= self._max_page_size):
            raise ValidationError(
                f"limit must be between 1 and {self._max_page_size}", field="limit",
            )

        post_filter: dict = {
            "viewer_id": viewer.id if viewer else None,
            "terms": parse_search_terms(query),
        }
        if category:
            category_row = await self._resolve_category(category)
            if category_row is None:
                return []
            post_filter["category_id"] = category_row.id

        return await self._posts.find_posts(post_filter, page, limit)

    async def get_post(self, raw_id: str, viewer: Identity | None = None) -> dict:
        post_id = PostId(parse_entity_id(raw_id, "Post"))
        row = await self._posts.get_post_row(post_id)
        if row is None or not can_view(row.is_published, row.author_id, viewer):
            raise ResourceNotFoundError("Post", raw_id)
        await self._posts.increment_views(post_id)
        post = await self._posts.find_post_by_id(post_id)
        if post is None:
            raise ResourceNotFoundError("Post", raw_id)
        return post

    # ─── Post mutations ──────────────────────────────────────────

    async def create_post(self, identity: Identity, data: dict) -> dict:
        fields = clean_patch(data)
        await self._require_category(fields.get("category_id"))
        post = await self._posts.insert_post(fields, identity.id)
        return post

    async def update_post(self, identity: Identity, raw_id: str, patch: dict) -> dict:
        post_id = PostId(parse_entity_id(raw_id, "Post"))
        row = await self._posts.get_post_row(post_id)
        if row is None:
            raise ResourceNotFoundError("Post", raw_id)
        check_ownership(row.author_id, identity, post_id)

        fields = clean_patch(patch)
        if "category_id" in fields:
            await self._require_category(fields["category_id"])
        post = await self._posts.update_post(post_id, fields)
        if post is None:
            raise ResourceNotFoundError("Post", raw_id)
        logger.info(
            "Post updated", extra={"post_id": post_id, "user_id": identity.id},
        )
        return post

    async def delete_post(self, identity: Identity, raw_id: str) -> None:
        post_id = PostId(parse_entity_id(raw_id, "Post"))
        row = await self._posts.get_post_row(post_id)
        if row is None:
            raise ResourceNotFoundError("Post", raw_id)
        check_ownership(row.author_id, identity, post_id)
        await self._posts.delete_post(post_id)

    async def add_comment(
        self, identity: Identity, raw_id: str, content: str | None,
    ) -> dict:
        post_id = PostId(parse_entity_id(raw_id, "Post"))
        row = await self._posts.get_post_row(post_id)
        if row is None or not can_view(row.is_published, row.author_id, identity):
            raise ResourceNotFoundError("Post", raw_id)
        post = await self._posts.append_comment(post_id, identity.id, content)
        if post is None:
            raise ResourceNotFoundError("Post", raw_id)
        logger.info(
            "Comment added", extra={"post_id": post_id, "user_id": identity.id},
        )
        return post

    # ─── Categories ──────────────────────────────────────────────

    async def list_categories(self) -> list[CategoryLike]:
        return await self._categories.find_categories()

    async def get_category(self, slug: str) -> CategoryLike:
        category = await self._categories.get_category_by_slug(slug)
        if category is None:
            raise ResourceNotFoundError("Category", slug)
        return category

    async def create_category(
        self, identity: Identity, name: str, description: str | None,
    ) -> CategoryLike:
        category = await self._categories.insert_category(name, description)
        logger.info(
            "Category created by user",
            extra={"category_id": category.id, "user_id": identity.id},
        )
        return category

    async def update_category(
        self,
        identity: Identity,
        raw_id: str,
        name: str | None,
        description: str | None,
    ) -> CategoryLike:
        category_id = CategoryId(parse_entity_id(raw_id, "Category"))
        category = await self._categories.update_category(
            category_id, name, description,
        )
        if category is None:
            raise ResourceNotFoundError("Category", raw_id)
        return category

    async def delete_category(self, identity: Identity, raw_id: str) -> None:
        category_id = CategoryId(parse_entity_id(raw_id, "Category"))
        if await self._categories.get_category(category_id) is None:
            raise ResourceNotFoundError("Category", raw_id)
        await self._categories.delete_category(category_id)
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "user_id": identity.id},
        )

    # ─── Helpers ─────────────────────────────────────────────────

    async def _resolve_category(self, ref: str) -> CategoryLike | None:
        category_id = try_parse_uuid(ref)
        if category_id is not None:
            return await self._categories.get_category(CategoryId(category_id))
        return await self._categories.get_category_by_slug(ref)

    async def _require_category(self, category_id) -> None:
        if category_id is None:
            raise ValidationError("Category is required", field="category")
        if await self._categories.get_category(CategoryId(category_id)) is None:
            raise ResourceNotFoundError("Category", str(category_id))
