"""Searchable tag text on posts, append position on comments.

Revision ID: 002_tag_text_position
Revises: 001_initial
Create Date: 2026-10-19

Existing rows are backfilled: tags_text from the JSON tags in array order,
comment positions from created_at order.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_tag_text_position"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("posts", sa.Column("tags_text", sa.Text, nullable=False, server_default=""))
    op.execute(
        r"""
        UPDATE posts SET tags_text = COALESCE((
            SELECT string_agg(t.value, E'\n' ORDER BY t.ord)
            FROM json_array_elements_text(posts.tags) WITH ORDINALITY AS t(value, ord)
        ), '')
        """
    )
    op.add_column("comments", sa.Column("position", sa.Integer, nullable=False, server_default="0"))
    op.execute(
        """
        UPDATE comments SET position = ranked.rn - 1
        FROM (
            SELECT id, ROW_NUMBER() OVER (PARTITION BY post_id ORDER BY created_at, id) AS rn
            FROM comments
        ) AS ranked
        WHERE comments.id = ranked.id
        """
    )


def downgrade() -> None:
    op.drop_column("comments", "position")
    op.drop_column("posts", "tags_text")
