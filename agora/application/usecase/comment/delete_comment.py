"""Delete comment use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    user_id: int  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    post_id: int
    removed: int  # Comments removed, including replies


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment and every reply below it."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the comment's author
        """
        comment, removed = await self.comment_service.delete_comment(
            CommentId(request.comment_id), UserId(request.user_id)
        )

        return DeleteCommentResponse(
            comment_id=comment.id, post_id=comment.post_id, removed=removed
        )
