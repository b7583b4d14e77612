"""Delete post use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: int
    user_id: int  # Current user ID (must be author)


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: int
    comments_removed: int


class DeletePostUseCase(BaseUseCase):
    """Use case for deleting a post and its whole discussion."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the post's author
        """
        removed = await self.post_service.delete_post(
            PostId(request.post_id), UserId(request.user_id)
        )
        return DeletePostResponse(post_id=request.post_id, comments_removed=removed)
