"""Shared request and response models for per-user collections.

A collection is the list of posts or comments a user has liked or saved.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.post.create_post import PostResponse
from agora.domain.model import Comment, Post
from agora.domain.value import TargetKind


class CollectionRequest(BaseModel):
    """One page of a user's collection."""

    user_id: int
    target_kind: TargetKind
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class CommentSummary(BaseModel):
    """Comment details outside of its thread."""

    comment_id: int
    post_id: int
    author_id: int
    author_name: str
    content: str
    likes: int
    created_at: datetime
    updated_at: datetime


class CollectionResponse(BaseModel):
    """One page of posts or comments; the list for the other kind is empty."""

    user_id: int
    target_kind: TargetKind
    posts: list[PostResponse] = Field(default_factory=list)
    comments: list[CommentSummary] = Field(default_factory=list)


def post_response(post: Post) -> PostResponse:
    return PostResponse(
        post_id=post.id,
        author_id=post.author_id,
        author_name=post.author_name,
        title=post.title,
        content=post.content,
        likes=post.likes,
        num_comments=post.num_comments,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def comment_summary(comment: Comment) -> CommentSummary:
    return CommentSummary(
        comment_id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        author_name=comment.author_name,
        content=comment.content,
        likes=comment.likes,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )
