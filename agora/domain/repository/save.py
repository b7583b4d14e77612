"""Save repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import List

from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.save import SaveRecord
from agora.domain.value import Target, TargetKind, UserId


class SaveRepository(ABC):
    """Repository for saved posts and comments."""

    @abstractmethod
    async def exists(self, user_id: UserId, target: Target, for_update: bool = False) -> bool:
        """Check whether the user has saved the target."""
        pass

    @abstractmethod
    async def insert(self, record: SaveRecord) -> bool:
        """Insert a save record unless one already exists.

        Returns:
            True if a record was inserted
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, target: Target) -> bool:
        """Delete a save record.

        Returns:
            True if a record was deleted
        """
        pass

    @abstractmethod
    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        """Delete every save record on the given targets."""
        pass

    @abstractmethod
    async def find_saved_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Post]:
        """Find the posts a user has saved, most recently saved first."""
        pass

    @abstractmethod
    async def find_saved_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find the comments a user has saved, most recently saved first."""
        pass
