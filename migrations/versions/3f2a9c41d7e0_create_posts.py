"""create_posts

Create the posts document table: one row per post, with the author
snapshot, the vote ledger (object keyed by voter ID) and the comment list
stored as JSONB.

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2025-11-02 18:12:07.412093

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2a9c41d7e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "posts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("seq", sa.BigInteger, sa.Identity(), nullable=False, unique=True),
        sa.Column("score", sa.Integer, nullable=False, server_default="1"),
        sa.Column("views", sa.Integer, nullable=False, server_default="1"),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("url", sa.Text, nullable=True),
        sa.Column("author", postgresql.JSONB, nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("text", sa.Text, nullable=True),
        sa.Column("votes", postgresql.JSONB, nullable=False, server_default="{}"),
        sa.Column("vote_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("comments", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("created", sa.String(24), nullable=False),
        sa.Column(
            "upvote_percentage", sa.Integer, nullable=False, server_default="0"
        ),
        sa.CheckConstraint("views >= 0", name="views_non_negative"),
        sa.CheckConstraint(
            "(type = 'link' AND url IS NOT NULL) OR (type = 'text' AND text IS NOT NULL)",
            name="content_matches_type",
        ),
    )

    op.create_index("idx_posts_score", "posts", [sa.text("score DESC"), "seq"])
    op.create_index("idx_posts_category", "posts", ["category"])
    op.execute("CREATE INDEX idx_posts_author_login ON posts ((author ->> 'login'))")


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_posts_author_login", table_name="posts")
    op.drop_index("idx_posts_category", table_name="posts")
    op.drop_index("idx_posts_score", table_name="posts")
    op.drop_table("posts")
