"""SQLAlchemy table definitions for redditclone.

Each post is stored as one document row: scalar fields are columns, while
the author snapshot, the vote ledger and the comment list are JSONB. The
ledger is an object keyed by voter ID so a single entry can be patched in
place. The schema matches the Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# POSTS TABLE (one document per post)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", String(36), primary_key=True),
    # Insertion sequence, the tie-breaker for listings
    Column("seq", BigInteger, Identity(), nullable=False, unique=True),
    Column("score", Integer, nullable=False, server_default="1"),
    Column("views", Integer, nullable=False, server_default="1"),
    Column("type", String(10), nullable=False),
    Column("title", Text, nullable=False),
    Column("url", Text, nullable=True),
    Column("author", JSONB, nullable=False),  # {"login", "id"}
    Column("category", String(20), nullable=False),
    Column("text", Text, nullable=True),
    Column("votes", JSONB, nullable=False, server_default="{}"),  # {voter: {"user", "vote"}}
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("comments", JSONB, nullable=False, server_default="[]"),
    Column("created", String(24), nullable=False),  # ISO-8601, fixed width
    Column("upvote_percentage", Integer, nullable=False, server_default="0"),
    CheckConstraint("views >= 0", name="views_non_negative"),
    CheckConstraint(
        "(type = 'link' AND url IS NOT NULL) OR (type = 'text' AND text IS NOT NULL)",
        name="content_matches_type",
    ),
)

Index("idx_posts_score", posts_table.c.score.desc(), posts_table.c.seq)
Index("idx_posts_category", posts_table.c.category)
Index("idx_posts_author_login", posts_table.c.author["login"].astext)
