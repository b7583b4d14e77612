"""Create comment use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import CommentService
from agora.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: int
    content: str = Field(min_length=1, max_length=10000)
    author_id: int  # User ID from authenticated user
    author_name: str
    parent_id: Optional[int] = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: int
    post_id: int
    parent_id: Optional[int]
    content: str
    likes: int
    created_at: datetime
    updated_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        The comment row, its closure edges, the author's like and the post's
        comment count are written in one transaction by the service.

        Args:
            request: Create comment request

        Returns:
            Create comment response with comment details

        Raises:
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the parent belongs to another post
            CommentInsertError: If the insert transaction fails
        """
        parent_id = (
            CommentId(request.parent_id) if request.parent_id is not None else None
        )
        comment = await self.comment_service.create_comment(
            post_id=PostId(request.post_id),
            author_id=UserId(request.author_id),
            author_name=request.author_name,
            content=request.content,
            parent_id=parent_id,
        )

        return CreateCommentResponse(
            comment_id=comment.id,
            post_id=comment.post_id,
            parent_id=parent_id,
            content=comment.content,
            likes=comment.likes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
