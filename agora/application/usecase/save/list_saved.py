"""List saved posts or comments use case."""

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.collection import (
    CollectionRequest,
    CollectionResponse,
    comment_summary,
    post_response,
)
from agora.domain.service import SaveService
from agora.domain.value import TargetKind, UserId


class ListSavedRequest(CollectionRequest):
    """List saved request."""


class ListSavedUseCase(BaseUseCase):
    """Use case for listing a user's saved posts or comments."""

    def __init__(self, save_service: SaveService) -> None:
        """Initialize list saved use case.

        Args:
            save_service: Save domain service
        """
        self.save_service = save_service

    async def execute(self, request: ListSavedRequest) -> CollectionResponse:
        """Execute list saved flow.

        Args:
            request: User, target kind and page

        Returns:
            Saved targets of the requested kind, most recently saved first
        """
        user_id = UserId(request.user_id)

        if request.target_kind == TargetKind.POST:
            posts = await self.save_service.saved_posts(
                user_id, limit=request.limit, offset=request.offset
            )
            return CollectionResponse(
                user_id=request.user_id,
                target_kind=request.target_kind,
                posts=[post_response(post) for post in posts],
            )

        comments = await self.save_service.saved_comments(
            user_id, limit=request.limit, offset=request.offset
        )
        return CollectionResponse(
            user_id=request.user_id,
            target_kind=request.target_kind,
            comments=[comment_summary(comment) for comment in comments],
        )
