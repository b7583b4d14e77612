"""SQLAlchemy table definitions for the forum.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

target_kind_enum = Enum("post", "comment", name="target_kind", create_type=False)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column("author_id", BigInteger, nullable=False),
    Column("author_name", String(255), nullable=False),  # Denormalized from users
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("num_comments", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("num_comments >= 0", name="num_comments_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(always=True), primary_key=True),
    Column(
        "post_id", BigInteger, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_id", BigInteger, nullable=False),
    Column("author_name", String(255), nullable=False),  # Denormalized from users
    Column("content", Text, nullable=False),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# COMMENT_PATHS TABLE (closure table)
# ============================================================================
# One row per (ancestor, descendant) pair, including a self-edge with
# path_length 0 for every comment.
comment_paths_table = Table(
    "comment_paths",
    metadata,
    Column(
        "ancestor",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "descendant",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("path_length", Integer, nullable=False),
    PrimaryKeyConstraint("ancestor", "descendant", name="pk_comment_paths"),
    CheckConstraint("path_length >= 0", name="path_length_non_negative"),
)

Index("idx_comment_paths_descendant", comment_paths_table.c.descendant)

# ============================================================================
# VOTES TABLE (vote ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("user_id", BigInteger, nullable=False),
    Column("target_kind", target_kind_enum, nullable=False),
    Column("target_id", BigInteger, nullable=False),
    Column("score", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "target_kind", "target_id", name="pk_votes"),
    CheckConstraint("score IN (-1, 1)", name="score_is_signed_unit"),
)

Index("idx_votes_target", votes_table.c.target_kind, votes_table.c.target_id)

# ============================================================================
# SAVES TABLE
# ============================================================================
saves_table = Table(
    "saves",
    metadata,
    Column("user_id", BigInteger, nullable=False),
    Column("target_kind", target_kind_enum, nullable=False),
    Column("target_id", BigInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "target_kind", "target_id", name="pk_saves"),
)

Index("idx_saves_target", saves_table.c.target_kind, saves_table.c.target_id)
