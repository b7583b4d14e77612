"""Builders for test data."""

from datetime import UTC, datetime, timedelta

from agora.domain.model.thread import CommentRow
from agora.domain.value import CommentId, PostId, UserId

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def make_row(
    comment_id: int,
    depth: int,
    breadcrumb: str | None = None,
    post_id: int = 1,
    ancestor_id: int | None = None,
) -> CommentRow:
    """Build a flattened comment row for tree builder tests.

    Args:
        comment_id: Comment ID
        depth: path_length from the top-level comment
        breadcrumb: Ordering key (defaults to the id alone)
        post_id: Owning post
        ancestor_id: Top-level ancestor (defaults to the comment itself)
    """
    return CommentRow(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        author_id=UserId(100 + comment_id),
        author_name=f"user{comment_id}",
        content=f"comment {comment_id}",
        likes=1,
        created_at=BASE_TIME + timedelta(minutes=comment_id),
        updated_at=BASE_TIME + timedelta(minutes=comment_id),
        path_length=depth,
        ancestor_id=CommentId(ancestor_id or comment_id),
        descendant_id=CommentId(comment_id),
        breadcrumb=breadcrumb or f"{comment_id:019d}",
    )
