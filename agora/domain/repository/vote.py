"""Vote repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Dict, List, Optional

from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.vote import VoteRecord
from agora.domain.value import Score, Target, TargetKind, UserId


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_score(
        self, user_id: UserId, target: Target, for_update: bool = False
    ) -> Optional[Score]:
        """Find a user's score on a target.

        Args:
            user_id: The user's ID
            target: The post or comment
            for_update: Lock the vote row for the rest of the transaction

        Returns:
            The score, or None if the user has not voted
        """
        pass

    @abstractmethod
    async def insert(self, vote: VoteRecord) -> VoteRecord:
        """Insert a vote record.

        Raises:
            ConstraintViolationError: If the user already voted on the target
        """
        pass

    @abstractmethod
    async def update_score(self, user_id: UserId, target: Target, score: Score) -> bool:
        """Change the score of an existing vote.

        Returns:
            True if a record was updated, False if none existed
        """
        pass

    @abstractmethod
    async def find_scores(
        self, user_id: UserId, kind: TargetKind, target_ids: Sequence[int]
    ) -> Dict[int, Score]:
        """Find a user's scores on several targets of one kind (batch query).

        Returns:
            Mapping of target ID to score, for targets the user voted on
        """
        pass

    @abstractmethod
    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        """Delete every vote on the given targets (used when they are deleted).

        Returns:
            Number of vote records deleted
        """
        pass

    @abstractmethod
    async def find_liked_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Post]:
        """Find the posts a user currently likes, most recently voted first."""
        pass

    @abstractmethod
    async def find_liked_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find the comments a user currently likes, most recently voted first."""
        pass
