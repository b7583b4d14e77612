"""Get post use case."""

from typing import Optional

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.post.create_post import PostResponse
from agora.domain.service import PostService, VoteService
from agora.domain.value import PostId, Score, TargetKind, UserId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: int
    viewer_id: Optional[int] = None  # Signed-in user, if any


class GetPostResponse(PostResponse):
    """Post details with the viewer's vote."""

    viewer_score: Optional[Score] = None


class GetPostUseCase(BaseUseCase):
    """Use case for reading a single post."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service (viewer's score)
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(request.post_id))

        viewer_score = None
        if request.viewer_id is not None:
            scores = await self.vote_service.scores_for(
                UserId(request.viewer_id), TargetKind.POST, [post.id]
            )
            viewer_score = scores.get(post.id)

        return GetPostResponse(
            post_id=post.id,
            author_id=post.author_id,
            author_name=post.author_name,
            title=post.title,
            content=post.content,
            likes=post.likes,
            num_comments=post.num_comments,
            created_at=post.created_at,
            updated_at=post.updated_at,
            viewer_score=viewer_score,
        )
