"""Content Store: persistence primitives for users, categories, posts and comments.

Invariants:
    - Every mutating method commits its own unit of work (one request = one session)
    - Unique-constraint races surface as ValidationError, never raw IntegrityError
    - Post reads go through populate_posts(): author/category resolved by an explicit
      batch join (core/populate.py), missing references populate as None
    - update_post() drops author_id/id from the patch before merging
    - delete_post() of an unknown id is a silent no-op; callers decide on 404
    - Drafts only appear in listings for their own author

Design Decisions:
    - Search ranking done in SQL (weighted CASE per field/term) so pagination stays in the DB
    - Tags searched through tags_text (raw values, newline-joined), kept in step with tags
      on every write; the JSON encoding of tags is never matched
    - Comments carry an append position so order survives identical timestamps
    - view_count bumped with UPDATE ... SET view_count = view_count + 1 (no read-modify-write)
    - populate_existing on reloads: identity map never serves stale counters or comment lists
"""

import logging
from uuid import UUID

from sqlalchemy import and_, case, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.category_rules import slugify, validate_category_fields
from app.core.domain_types import CategoryId, PostId, UserId
from app.core.errors import ConflictError, ValidationError
from app.core.populate import (
    populate_post, populate_post_summary, referenced_ids,
)
from app.core.post_rules import (
    clean_patch, validate_comment_content, validate_post_fields,
)
from app.core.search_posts import (
    FIELD_WEIGHTS, LIKE_ESCAPE, like_pattern, tags_search_text,
)
from app.models.category import Category
from app.models.comment import Comment
from app.models.post import Post
from app.models.user import User

logger = logging.getLogger(__name__)


class ContentStore:
    """SQLAlchemy-backed store for the blog content aggregate."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Users ───────────────────────────────────────────────────

    async def get_user(self, user_id: UserId) -> User | None:
        return await self._db.get(User, user_id)

    async def find_user_by_identifier(self, identifier: str) -> User | None:
        """Look up by username (exact) or email (case-insensitive)."""
        identifier = identifier.strip()
        result = await self._db.execute(
            select(User).where(or_(
                User.username == identifier,
                User.email == identifier.lower(),
            )),
        )
        return result.scalars().first()

    async def username_or_email_taken(self, username: str, email: str) -> str | None:
        """Return the name of the first conflicting field, or None."""
        result = await self._db.execute(
            select(User.username, User.email).where(or_(
                User.username == username, User.email == email,
            )),
        )
        for row in result.all():
            if row.username == username:
                return "username"
            if row.email == email:
                return "email"
        return None

    async def insert_user(
        self, username: str, email: str, password_hash: str,
    ) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Integrity conflict on registration: {e.orig}")
            taken = await self.username_or_email_taken(username, email)
            if taken:
                raise ValidationError(f"That {taken} is already registered", field=taken)
            raise ValidationError("Username or email already registered")
        return user

    # ─── Categories ──────────────────────────────────────────────

    async def find_categories(self) -> list[Category]:
        result = await self._db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def get_category(self, category_id: CategoryId) -> Category | None:
        return await self._db.get(Category, category_id)

    async def get_category_by_slug(self, slug: str) -> Category | None:
        result = await self._db.execute(
            select(Category).where(Category.slug == slug),
        )
        return result.scalar_one_or_none()

    async def insert_category(
        self, name: str | None, description: str | None,
    ) -> Category:
        name, description = validate_category_fields(name, description)
        slug = slugify(name)
        await self._ensure_category_unique(name, slug)
        category = Category(name=name, description=description, slug=slug)
        self._db.add(category)
        await self._commit("Category already exists", "name")
        logger.info("Category created", extra={"category_id": category.id})
        return category

    async def update_category(
        self,
        category_id: CategoryId,
        name: str | None,
        description: str | None,
    ) -> Category | None:
        """Partial update; slug is regenerated whenever the name changes."""
        category = await self.get_category(category_id)
        if category is None:
            return None
        new_name, new_description = validate_category_fields(
            category.name if name is None else name,
            category.description if description is None else description,
        )
        if new_name != category.name:
            slug = slugify(new_name)
            await self._ensure_category_unique(new_name, slug, exclude=category.id)
            category.name = new_name
            category.slug = slug
        category.description = new_description
        await self._commit("Category already exists", "name")
        return category

    async def delete_category(self, category_id: CategoryId) -> None:
        """Refuse while posts reference it; unknown id is a no-op."""
        category = await self.get_category(category_id)
        if category is None:
            return
        in_use = await self._db.scalar(
            select(func.count()).select_from(Post)
            .where(Post.category_id == category_id),
        )
        if in_use:
            raise ConflictError(
                f"Category '{category.name}' still has {in_use} post(s)",
            )
        await self._db.delete(category)
        await self._db.commit()

    async def _ensure_category_unique(
        self, name: str, slug: str, exclude: UUID | None = None,
    ) -> None:
        query = select(Category.id).where(
            or_(Category.name == name, Category.slug == slug),
        )
        if exclude is not None:
            query = query.where(Category.id != exclude)
        if (await self._db.execute(query)).first() is not None:
            raise ValidationError("Category already exists", field="name")

    # ─── Posts ───────────────────────────────────────────────────

    async def find_posts(
        self, post_filter: dict, page: int, page_size: int,
    ) -> list[dict]:
        """One page of populated post summaries.

        post_filter keys (all optional): category_id, terms (parsed search
        terms), viewer_id (sees own drafts).
        """
        query = select(Post).where(
            _visible_to(post_filter.get("viewer_id")),
        )
        if post_filter.get("category_id") is not None:
            query = query.where(Post.category_id == post_filter["category_id"])

        terms = post_filter.get("terms") or []
        if terms:
            patterns = [like_pattern(t) for t in terms]
            query = query.where(and_(*(_matches(p) for p in patterns)))
            query = query.order_by(
                _rank(patterns).desc(), Post.created_at.desc(), Post.id.desc(),
            )
        else:
            query = query.order_by(Post.created_at.desc(), Post.id.desc())

        query = query.offset((page - 1) * page_size).limit(page_size)
        result = await self._db.execute(query)
        posts = list(result.scalars().all())
        return await self.populate_posts(posts, summary=True)

    async def get_post_row(self, post_id: PostId) -> Post | None:
        result = await self._db.execute(
            select(Post)
            .where(Post.id == post_id)
            .options(selectinload(Post.comments))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_post_by_id(self, post_id: PostId) -> dict | None:
        post = await self.get_post_row(post_id)
        if post is None:
            return None
        return (await self.populate_posts([post]))[0]

    async def insert_post(self, data: dict, author_id: UserId) -> dict:
        fields = validate_post_fields(clean_patch(data))
        tags = fields.get("tags", [])
        post = Post(
            title=fields["title"],
            content=fields["content"],
            excerpt=fields.get("excerpt"),
            category_id=fields["category_id"],
            tags=tags,
            tags_text=tags_search_text(tags),
            is_published=fields.get("is_published", False),
            author_id=author_id,
        )
        self._db.add(post)
        await self._commit("Post violates a constraint", None)
        logger.info(
            "Post created", extra={"post_id": post.id, "user_id": author_id},
        )
        return await self.find_post_by_id(PostId(post.id))

    async def update_post(self, post_id: PostId, patch: dict) -> dict | None:
        post = await self.get_post_row(post_id)
        if post is None:
            return None
        fields = validate_post_fields(clean_patch(patch), partial=True)
        for name, value in fields.items():
            setattr(post, name, value)
        if "tags" in fields:
            post.tags_text = tags_search_text(fields["tags"])
        await self._commit("Post violates a constraint", None)
        return await self.find_post_by_id(post_id)

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its comments in one transaction."""
        post = await self.get_post_row(post_id)
        if post is None:
            return
        await self._db.delete(post)
        await self._db.commit()
        logger.info("Post deleted", extra={"post_id": post_id})

    async def increment_views(self, post_id: PostId) -> None:
        await self._db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1, updated_at=Post.updated_at)
            .execution_options(synchronize_session=False),
        )
        await self._db.commit()

    async def append_comment(
        self, post_id: PostId, author_id: UserId, content: str | None,
    ) -> dict | None:
        content = validate_comment_content(content)
        exists = await self._db.scalar(select(Post.id).where(Post.id == post_id))
        if exists is None:
            return None
        position = await self._db.scalar(
            select(func.count()).select_from(Comment)
            .where(Comment.post_id == post_id),
        )
        self._db.add(Comment(
            post_id=post_id, author_id=author_id, content=content,
            position=position,
        ))
        await self._commit("Comment violates a constraint", "content")
        return await self.find_post_by_id(post_id)

    # ─── Population ──────────────────────────────────────────────

    async def populate_posts(
        self, posts: list[Post], summary: bool = False,
    ) -> list[dict]:
        """Resolve author/category references with one query per table."""
        if not posts:
            return []
        user_ids, category_ids = referenced_ids(posts)
        users = {}
        if user_ids:
            rows = await self._db.execute(select(User).where(User.id.in_(user_ids)))
            users = {u.id: u for u in rows.scalars().all()}
        categories = {}
        if category_ids:
            rows = await self._db.execute(
                select(Category).where(Category.id.in_(category_ids)),
            )
            categories = {c.id: c for c in rows.scalars().all()}
        render = populate_post_summary if summary else populate_post
        return [render(p, users, categories) for p in posts]

    async def _commit(self, conflict_message: str, field: str | None) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Integrity conflict: {e.orig}")
            raise ValidationError(conflict_message, field=field)


# ─── Query helpers ───────────────────────────────────────────────

def _search_columns():
    return {
        "title": Post.title,
        "tags": Post.tags_text,
        "excerpt": Post.excerpt,
        "content": Post.content,
    }


def _matches(pattern: str):
    return or_(*(
        col.ilike(pattern, escape=LIKE_ESCAPE)
        for col in _search_columns().values()
    ))


def _rank(patterns: list[str]):
    columns = _search_columns()
    score = None
    for pattern in patterns:
        for name, weight in FIELD_WEIGHTS.items():
            hit = case(
                (columns[name].ilike(pattern, escape=LIKE_ESCAPE), weight),
                else_=0,
            )
            score = hit if score is None else score + hit
    return score


def _visible_to(viewer_id: UUID | None):
    if viewer_id is None:
        return Post.is_published.is_(True)
    return or_(Post.is_published.is_(True), Post.author_id == viewer_id)
