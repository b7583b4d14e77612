"""Unsave use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.save.save import SaveResponse
from agora.domain.service import SaveService
from agora.domain.value import Target, TargetKind, UserId


class UnsaveRequest(BaseModel):
    """Unsave request."""

    target_kind: TargetKind
    target_id: int
    user_id: int


class UnsaveUseCase(BaseUseCase):
    """Use case for removing a saved post or comment."""

    def __init__(self, save_service: SaveService) -> None:
        self.save_service = save_service

    async def execute(self, request: UnsaveRequest) -> SaveResponse:
        target = Target(kind=request.target_kind, id=request.target_id)
        changed = await self.save_service.unsave(UserId(request.user_id), target)

        return SaveResponse(
            target_kind=target.kind,
            target_id=target.id,
            saved=False,
            changed=changed,
        )
