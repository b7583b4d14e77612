"""Comment repository interface."""

from abc import abstractmethod
from collections.abc import Sequence
from typing import List, Optional

from agora.domain.model.comment import Comment
from agora.domain.model.thread import CommentRow
from agora.domain.repository.counter import LikeCounterRepository
from agora.domain.value import CommentId, PostId, UserId


class CommentRepository(LikeCounterRepository):
    """Repository for Comment entity and its closure table.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find comments by a specific author, newest first."""
        pass

    @abstractmethod
    async def find_top_level_ids(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of a post's top-level comments.

        A comment is top-level when it is the descendant of no edge with a
        positive path length.

        Args:
            post_id: The post ID

        Returns:
            Top-level comment IDs in ascending order
        """
        pass

    @abstractmethod
    async def find_subtree_rows(
        self, top_level_ids: Sequence[CommentId]
    ) -> List[CommentRow]:
        """Fetch every comment below (and including) the given top-level comments.

        Returns one row per comment, carrying its depth below its top-level
        ancestor and its breadcrumb, ordered by breadcrumb ascending so
        that rows form a preorder traversal.

        Args:
            top_level_ids: IDs from find_top_level_ids

        Returns:
            Flattened rows in preorder
        """
        pass

    @abstractmethod
    async def insert(
        self, post_id: PostId, author_id: UserId, author_name: str, content: str
    ) -> Comment:
        """Insert a comment row with zero likes.

        Returns:
            The stored comment with its store-assigned ID
        """
        pass

    @abstractmethod
    async def insert_closure_edges(
        self, comment_id: CommentId, parent_id: Optional[CommentId]
    ) -> int:
        """Insert the closure edges of a new comment.

        One edge (ancestor, comment_id, path_length + 1) for every edge
        that has ``parent_id`` as descendant, plus the self-edge
        (comment_id, comment_id, 0). Top-level comments get only the
        self-edge.

        Returns:
            Number of edges inserted
        """
        pass

    @abstractmethod
    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Find a comment and all of its descendants.

        Returns:
            IDs of the comment and every descendant, the comment first
        """
        pass

    @abstractmethod
    async def delete_closure_edges(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every edge whose descendant is one of ``comment_ids``.

        Returns:
            Number of edges deleted
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comment rows.

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Update the content of a comment.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_ids_for_post(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of every comment on a post, in ascending order."""
        pass

    @abstractmethod
    async def lock_many(self, comment_ids: Sequence[CommentId]) -> List[CommentId]:
        """Lock several comment rows for the rest of the transaction.

        Rows are locked in ascending ID order so that two callers locking
        overlapping sets cannot deadlock.

        Returns:
            IDs of the rows that exist, ascending
        """
        pass
