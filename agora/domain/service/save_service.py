"""Save domain service."""

import logfire

from agora.domain.error import NotFoundError
from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.save import SaveRecord
from agora.domain.repository import (
    CommentRepository,
    LikeCounterRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
)
from agora.domain.value import Target, TargetKind, UserId

from .base import Service


class SaveService(Service):
    """Domain service for saving (bookmarking) posts and comments.

    Save and unsave are idempotent: saving a saved target or unsaving an
    unsaved one changes nothing.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        save_repository: SaveRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize save service.

        Args:
            unit_of_work: Transaction boundary
            save_repository: Save repository
            post_repository: Post repository (target lookup)
            comment_repository: Comment repository (target lookup)
        """
        self.unit_of_work = unit_of_work
        self.save_repository = save_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    def _entities_for(self, kind: TargetKind) -> LikeCounterRepository:
        if kind == TargetKind.POST:
            return self.post_repository
        return self.comment_repository

    async def save(self, user_id: UserId, target: Target) -> bool:
        """Save a target for a user.

        Returns:
            True if the target was newly saved, False if it already was

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span("save_service.save", user_id=user_id, target=str(target)):
            async with self.unit_of_work.transaction():
                await self._require_target(target)

                if await self.save_repository.exists(user_id, target, for_update=True):
                    logfire.debug("Already saved", user_id=user_id, target=str(target))
                    return False

                inserted = await self.save_repository.insert(
                    SaveRecord(user_id=user_id, target=target)
                )

            if inserted:
                logfire.info("Target saved", user_id=user_id, target=str(target))
            return inserted

    async def unsave(self, user_id: UserId, target: Target) -> bool:
        """Remove a saved target for a user.

        Returns:
            True if a save was removed, False if the target was not saved

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span("save_service.unsave", user_id=user_id, target=str(target)):
            async with self.unit_of_work.transaction():
                await self._require_target(target)

                if not await self.save_repository.exists(
                    user_id, target, for_update=True
                ):
                    logfire.debug("Not saved", user_id=user_id, target=str(target))
                    return False

                deleted = await self.save_repository.delete(user_id, target)

            if deleted:
                logfire.info("Target unsaved", user_id=user_id, target=str(target))
            return deleted

    async def _require_target(self, target: Target) -> None:
        if not await self._entities_for(target.kind).lock(target.id):
            logfire.warn("Save toggle on non-existent target", target=str(target))
            raise NotFoundError(target.kind.value, str(target.id))

    async def saved_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Post]:
        """Posts the user has saved, most recently saved first."""
        async with self.unit_of_work.transaction():
            return await self.save_repository.find_saved_posts(
                user_id, limit=limit, offset=offset
            )

    async def saved_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        """Comments the user has saved, most recently saved first."""
        async with self.unit_of_work.transaction():
            return await self.save_repository.find_saved_comments(
                user_id, limit=limit, offset=offset
            )
