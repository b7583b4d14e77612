"""Save use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import SaveService
from agora.domain.value import Target, TargetKind, UserId


class SaveRequest(BaseModel):
    """Save request."""

    target_kind: TargetKind
    target_id: int
    user_id: int


class SaveResponse(BaseModel):
    """Save state after a save or unsave."""

    target_kind: TargetKind
    target_id: int
    saved: bool
    changed: bool


class SaveUseCase(BaseUseCase):
    """Use case for saving a post or comment."""

    def __init__(self, save_service: SaveService) -> None:
        """Initialize save use case.

        Args:
            save_service: Save domain service
        """
        self.save_service = save_service

    async def execute(self, request: SaveRequest) -> SaveResponse:
        """Execute save flow.

        Raises:
            NotFoundError: If the target does not exist
        """
        target = Target(kind=request.target_kind, id=request.target_id)
        changed = await self.save_service.save(UserId(request.user_id), target)

        return SaveResponse(
            target_kind=target.kind,
            target_id=target.id,
            saved=True,
            changed=changed,
        )
