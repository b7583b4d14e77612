"""Like use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import VoteService
from agora.domain.value import Score, Target, TargetKind, UserId


class LikeRequest(BaseModel):
    """Like request."""

    target_kind: TargetKind
    target_id: int
    user_id: int  # User ID from the authenticated session


class VoteResponse(BaseModel):
    """Vote state after a like or dislike."""

    target_kind: TargetKind
    target_id: int
    score: Score
    delta: int  # Change applied to the target's like counter
    changed: bool


class LikeUseCase(BaseUseCase):
    """Use case for liking a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize like use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: LikeRequest) -> VoteResponse:
        """Execute like flow.

        Liking something already liked changes nothing; liking something
        disliked flips the vote.

        Raises:
            NotFoundError: If the target does not exist
        """
        target = Target(kind=request.target_kind, id=request.target_id)
        outcome = await self.vote_service.like(UserId(request.user_id), target)

        return VoteResponse(
            target_kind=target.kind,
            target_id=target.id,
            score=outcome.score,
            delta=outcome.delta,
            changed=outcome.changed,
        )
