"""Update comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import CommentService
from agora.domain.value import CommentId, PostId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    post_id: int  # For validation
    user_id: int  # Current user ID (must be author)
    content: str = Field(min_length=1, max_length=10000)


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment_id: int
    post_id: int
    author_id: int
    author_name: str
    content: str
    likes: int
    created_at: datetime
    updated_at: datetime


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, post ID, user ID and content

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment does not exist
            ValidationError: If the comment belongs to another post
            NotAuthorizedError: If the user doesn't own the comment
        """
        updated = await self.comment_service.update_content(
            CommentId(request.comment_id),
            UserId(request.user_id),
            request.content,
            post_id=PostId(request.post_id),
        )

        return UpdateCommentResponse(
            comment_id=updated.id,
            post_id=updated.post_id,
            author_id=updated.author_id,
            author_name=updated.author_name,
            content=updated.content,
            likes=updated.likes,
            created_at=updated.created_at,
            updated_at=updated.updated_at,
        )
