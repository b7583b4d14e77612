"""Shared contract for entities carrying a like counter."""

from abc import ABC, abstractmethod


class LikeCounterRepository(ABC):
    """Row locking and counter updates for votable entities.

    Implemented by the post and comment repositories so the vote ledger can
    treat both target kinds alike.
    """

    @abstractmethod
    async def lock(self, target_id: int) -> bool:
        """Lock the entity row for the rest of the transaction.

        Concurrent callers locking the same row wait until the holder's
        transaction ends.

        Args:
            target_id: Post or comment ID

        Returns:
            True if the row exists, False otherwise
        """
        pass

    @abstractmethod
    async def adjust_likes(self, target_id: int, delta: int) -> None:
        """Atomically add ``delta`` to the entity's like counter.

        Args:
            target_id: Post or comment ID
            delta: Signed amount to add
        """
        pass
