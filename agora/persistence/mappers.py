"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from agora.domain.model import Comment, CommentRow, Post, VoteRecord
from agora.domain.value import CommentId, PostId, UserId


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        title=row["title"],
        content=row["content"],
        likes=row["likes"],
        num_comments=row["num_comments"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        content=row["content"],
        likes=row["likes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment_row(row: Dict[str, Any]) -> CommentRow:
    """Convert a subtree query row to a CommentRow.

    Args:
        row: Database row as dict, with closure columns

    Returns:
        CommentRow ready for the tree builder
    """
    return CommentRow(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        author_name=row["author_name"],
        content=row["content"],
        likes=row["likes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        path_length=row["path_length"],
        ancestor_id=CommentId(row["ancestor_id"]),
        descendant_id=CommentId(row["descendant_id"]),
        breadcrumb=row["breadcrumb"],
    )


def vote_to_dict(vote: VoteRecord) -> Dict[str, Any]:
    """Convert VoteRecord domain model to database dict.

    Args:
        vote: Vote record

    Returns:
        Dict suitable for database insertion
    """
    return {
        "user_id": vote.user_id,
        "target_kind": vote.target.kind.value,
        "target_id": vote.target.id,
        "score": int(vote.score),
    }
