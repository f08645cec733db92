"""Post ORM: persists the post aggregate root.

Invariants:
    - author_id set once at insert, never written by updates
    - category_id always references an existing category (deletion is refused while referenced)
    - view_count only ever increments
    - Owns its comments: cascade delete, ordered oldest first

Design Decisions:
    - JSON column for tags: ordered list with duplicates, read/written whole
    - tags_text mirrors tags for search; always set together with tags
    - Comments in their own table with cascade delete-orphan rather than a JSON
      blob: appends don't rewrite the post row
    - Author/category resolved by core/populate.py, not relationship() loading
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Post(Base):
    """Post entity: aggregate root for its comments."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("categories.id"), nullable=False,
        index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
        index=True,
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    # Newline-joined tag values; written by the store alongside tags
    tags_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[Comment.position, Comment.created_at]",
    )
