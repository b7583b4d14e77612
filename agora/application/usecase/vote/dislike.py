"""Dislike use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.vote.like import VoteResponse
from agora.domain.service import VoteService
from agora.domain.value import Target, TargetKind, UserId


class DislikeRequest(BaseModel):
    """Dislike request."""

    target_kind: TargetKind
    target_id: int
    user_id: int


class DislikeUseCase(BaseUseCase):
    """Use case for disliking a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: DislikeRequest) -> VoteResponse:
        target = Target(kind=request.target_kind, id=request.target_id)
        outcome = await self.vote_service.dislike(UserId(request.user_id), target)

        return VoteResponse(
            target_kind=target.kind,
            target_id=target.id,
            score=outcome.score,
            delta=outcome.delta,
            changed=outcome.changed,
        )
