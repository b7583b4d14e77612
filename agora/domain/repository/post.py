"""Post repository interface."""

from abc import abstractmethod
from typing import Optional

from agora.domain.model.post import Post
from agora.domain.repository.counter import LikeCounterRepository
from agora.domain.value import PostId, UserId


class PostRepository(LikeCounterRepository):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(
        self, author_id: UserId, author_name: str, title: str, content: str
    ) -> Post:
        """Insert a new post with zero likes and zero comments.

        Returns:
            The stored post, with its store-assigned ID
        """
        pass

    @abstractmethod
    async def update(self, post_id: PostId, title: str, content: str) -> Optional[Post]:
        """Update title and content.

        Returns:
            The updated post, or None if no such post exists
        """
        pass

    @abstractmethod
    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to ``num_comments``.

        Args:
            post_id: The post ID
            delta: Positive on insert, negative (removed count) on delete
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row.

        Returns:
            True if a post was deleted
        """
        pass
