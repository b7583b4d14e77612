"""initial_schema

Create the forum schema:
- Posts (with like and comment counters)
- Comments (threaded with unlimited depth)
- Comment paths (closure table of every ancestor/descendant pair)
- Votes (one signed score per user and target)
- Saves (bookmarked posts and comments)

Revision ID: 3f1c2a9d7e01
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE target_kind AS ENUM ('post', 'comment');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("author_name", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("likes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("num_comments", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("num_comments >= 0", name="num_comments_non_negative"),
    )
    op.create_index(
        "idx_posts_created_at", "posts", [sa.text("created_at DESC")], unique=False
    )
    op.create_index("idx_posts_author_id", "posts", ["author_id"], unique=False)

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("author_name", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("likes", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id"], unique=False)
    op.create_index("idx_comments_author_id", "comments", ["author_id"], unique=False)

    # ========================================================================
    # COMMENT_PATHS table (closure table)
    # ========================================================================
    op.create_table(
        "comment_paths",
        sa.Column("ancestor", sa.BigInteger(), nullable=False),
        sa.Column("descendant", sa.BigInteger(), nullable=False),
        sa.Column("path_length", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["ancestor"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["descendant"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("ancestor", "descendant", name="pk_comment_paths"),
        sa.CheckConstraint("path_length >= 0", name="path_length_non_negative"),
    )
    op.create_index(
        "idx_comment_paths_descendant", "comment_paths", ["descendant"], unique=False
    )

    # ========================================================================
    # VOTES table (vote ledger)
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "target_kind",
            postgresql.ENUM("post", "comment", name="target_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("target_id", sa.BigInteger(), nullable=False),
        sa.Column("score", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id", "target_kind", "target_id", name="pk_votes"),
        sa.CheckConstraint("score IN (-1, 1)", name="score_is_signed_unit"),
    )
    op.create_index(
        "idx_votes_target", "votes", ["target_kind", "target_id"], unique=False
    )

    # ========================================================================
    # SAVES table
    # ========================================================================
    op.create_table(
        "saves",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "target_kind",
            postgresql.ENUM("post", "comment", name="target_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("target_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id", "target_kind", "target_id", name="pk_saves"),
    )
    op.create_index(
        "idx_saves_target", "saves", ["target_kind", "target_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_saves_target", table_name="saves")
    op.drop_table("saves")
    op.drop_index("idx_votes_target", table_name="votes")
    op.drop_table("votes")
    op.drop_index("idx_comment_paths_descendant", table_name="comment_paths")
    op.drop_table("comment_paths")
    op.drop_index("idx_comments_author_id", table_name="comments")
    op.drop_index("idx_comments_post_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_posts_author_id", table_name="posts")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
    op.execute("DROP TYPE IF EXISTS target_kind")
