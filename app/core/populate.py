"""Population: explicit read-side join of posts with their authors and categories.

Invariants:
    - Pure functions: no IO, no async, no DB
    - A missing author or category populates as None; never raises
    - password_hash and email never appear in populated output
    - Comment order is preserved (oldest first, as appended)

Design Decisions:
    - Join done here, not by ORM relationship loading: the store batch-loads the
      referenced users/categories once per page and hands them in as maps
      (ADR: one query per referenced table, no N+1, testable without a DB)
"""

from uuid import UUID

from app.core.category_rules import category_url
from app.core.domain_types import PostStatus
from app.core.post_rules import preview_excerpt
from app.core.repository_protocols import (
    CategoryLike, CommentLike, PostLike, UserLike,
)


def referenced_ids(posts: list[PostLike]) -> tuple[set[UUID], set[UUID]]:
    """Collect (user_ids, category_ids) referenced by posts and their comments."""
    user_ids: set[UUID] = set()
    category_ids: set[UUID] = set()
    for post in posts:
        if post.author_id is not None:
            user_ids.add(post.author_id)
        if post.category_id is not None:
            category_ids.add(post.category_id)
        for comment in post.comments:
            if comment.author_id is not None:
                user_ids.add(comment.author_id)
    return user_ids, category_ids


def author_summary(user: UserLike | None) -> dict | None:
    if user is None:
        return None
    return {"id": str(user.id), "username": user.username}


def category_summary(category: CategoryLike | None) -> dict | None:
    if category is None:
        return None
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "url": category_url(category.slug),
    }


def populate_comment(comment: CommentLike, users: dict[UUID, UserLike]) -> dict:
    return {
        "id": str(comment.id),
        "content": comment.content,
        "author": author_summary(users.get(comment.author_id)),
        "created_at": comment.created_at,
    }


def populate_post(
    post: PostLike,
    users: dict[UUID, UserLike],
    categories: dict[UUID, CategoryLike],
) -> dict:
    """Full post view: content, tags and resolved comments."""
    return {
        "id": str(post.id),
        "title": post.title,
        "content": post.content,
        "excerpt": post.excerpt,
        "category": category_summary(categories.get(post.category_id)),
        "author": author_summary(users.get(post.author_id)),
        "tags": list(post.tags or []),
        "is_published": post.is_published,
        "status": PostStatus.of(post.is_published).value,
        "view_count": post.view_count,
        "comments": [populate_comment(c, users) for c in post.comments],
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def populate_post_summary(
    post: PostLike,
    users: dict[UUID, UserLike],
    categories: dict[UUID, CategoryLike],
) -> dict:
    """Listing view: excerpt preview instead of content, comment count instead of comments."""
    return {
        "id": str(post.id),
        "title": post.title,
        "excerpt": preview_excerpt(post.excerpt, post.content),
        "category": category_summary(categories.get(post.category_id)),
        "author": author_summary(users.get(post.author_id)),
        "tags": list(post.tags or []),
        "is_published": post.is_published,
        "status": PostStatus.of(post.is_published).value,
        "view_count": post.view_count,
        "comment_count": len(post.comments),
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }
