"""List liked posts or comments use case."""

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.collection import (
    CollectionRequest,
    CollectionResponse,
    comment_summary,
    post_response,
)
from agora.domain.service import VoteService
from agora.domain.value import TargetKind, UserId


class ListLikedRequest(CollectionRequest):
    """List liked request."""


class ListLikedUseCase(BaseUseCase):
    """Use case for listing what a user currently likes.

    Disliked targets are not listed.
    """

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize list liked use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ListLikedRequest) -> CollectionResponse:
        user_id = UserId(request.user_id)
        response = CollectionResponse(
            user_id=request.user_id, target_kind=request.target_kind
        )

        if request.target_kind == TargetKind.POST:
            posts = await self.vote_service.liked_posts(
                user_id, limit=request.limit, offset=request.offset
            )
            response.posts = [post_response(post) for post in posts]
        else:
            comments = await self.vote_service.liked_comments(
                user_id, limit=request.limit, offset=request.offset
            )
            response.comments = [comment_summary(comment) for comment in comments]

        return response
