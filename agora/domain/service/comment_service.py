"""Comment domain service.

Creating and deleting comments touches several tables (the comment row,
its closure edges, the vote ledger and the post's comment counter). Each
operation runs in a single transaction so a failure leaves nothing behind.
"""

import logfire

from agora.domain.error import (
    ClosureEdgeInsertError,
    CommentCountUpdateError,
    CommentRowInsertError,
    NotAuthorizedError,
    NotFoundError,
    SelfLikeInsertError,
    StoreError,
    ValidationError,
)
from agora.domain.model.comment import Comment
from agora.domain.model.vote import VoteRecord
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.domain.value import CommentId, PostId, Score, Target, TargetKind, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        save_repository: SaveRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            unit_of_work: Transaction boundary
            comment_repository: Comment repository
            post_repository: Post repository
            vote_repository: Vote repository
            save_repository: Save repository
        """
        self.unit_of_work = unit_of_work
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.save_repository = save_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_name: str,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Steps, in one transaction:
        1. Insert the comment row
        2. Insert its closure edges
        3. Record the author's like on their own comment
        4. Increment the post's comment count

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_name: Author display name
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment (with its self-like counted)

        Raises:
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the parent belongs to another post
            CommentInsertError: If one of the steps fails (see ``step``)
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=post_id,
            author_id=author_id,
            parent_id=parent_id,
        ):
            async with self.unit_of_work.transaction():
                # Lock order is post, then comments, everywhere
                if not await self.post_repository.lock(post_id):
                    logfire.warn("Comment on non-existent post", post_id=post_id)
                    raise NotFoundError("Post", str(post_id))

                if parent_id is not None:
                    # Held until commit, so the parent's edges cannot be
                    # deleted before ours are copied from them
                    parent = None
                    if await self.comment_repository.lock(parent_id):
                        parent = await self.comment_repository.find_by_id(parent_id)
                    if parent is None:
                        logfire.error(
                            "Parent comment not found",
                            parent_id=parent_id,
                            post_id=post_id,
                        )
                        raise NotFoundError("Comment", str(parent_id))
                    if parent.post_id != post_id:
                        logfire.error(
                            "Parent comment does not belong to post",
                            parent_id=parent_id,
                            parent_post_id=parent.post_id,
                            target_post_id=post_id,
                        )
                        raise ValidationError(
                            "Parent comment does not belong to this post"
                        )

                try:
                    comment = await self.comment_repository.insert(
                        post_id=post_id,
                        author_id=author_id,
                        author_name=author_name,
                        content=content,
                    )
                except StoreError as e:
                    raise CommentRowInsertError(e) from e

                try:
                    await self.comment_repository.insert_closure_edges(
                        comment.id, parent_id
                    )
                except StoreError as e:
                    raise ClosureEdgeInsertError(e) from e

                # Authors like their own comments
                try:
                    await self.vote_repository.insert(
                        VoteRecord(
                            user_id=author_id,
                            target=Target.comment(comment.id),
                            score=Score.LIKE,
                        )
                    )
                    await self.comment_repository.adjust_likes(comment.id, 1)
                except StoreError as e:
                    raise SelfLikeInsertError(e) from e

                try:
                    await self.post_repository.adjust_comment_count(post_id, 1)
                except StoreError as e:
                    raise CommentCountUpdateError(e) from e

            logfire.info(
                "Comment created",
                comment_id=comment.id,
                post_id=post_id,
                parent_id=parent_id,
            )
            return comment.model_copy(update={"likes": comment.likes + 1})

    async def delete_comment(
        self, comment_id: CommentId, user_id: UserId
    ) -> tuple[Comment, int]:
        """Delete a comment together with its whole subtree.

        Removes the closure edges, vote and save records and rows of the
        comment and all of its descendants, then lowers the post's comment
        count by the number of comments removed. The author check runs in
        the same transaction as the delete.

        Args:
            comment_id: Comment ID
            user_id: Acting user, who must be the comment's author

        Returns:
            The deleted comment and the number of comments removed,
            replies included

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the comment's author
        """
        with logfire.span(
            "comment_service.delete_comment", comment_id=comment_id, user_id=user_id
        ):
            async with self.unit_of_work.transaction():
                comment = await self._lock_own_comment(comment_id, user_id)

                # New replies need the post lock (held above), so the
                # subtree read here is complete
                subtree = await self.comment_repository.find_subtree_ids(comment_id)
                if not subtree:
                    # Comment without edges; still remove the row itself
                    subtree = [comment_id]
                # Voters lock the comment row, not the post
                await self.comment_repository.lock_many(subtree)

                await self.comment_repository.delete_closure_edges(subtree)
                await self.vote_repository.delete_for_targets(
                    TargetKind.COMMENT, subtree
                )
                await self.save_repository.delete_for_targets(
                    TargetKind.COMMENT, subtree
                )
                removed = await self.comment_repository.delete_many(subtree)

                if removed:
                    await self.post_repository.adjust_comment_count(
                        comment.post_id, -removed
                    )

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                post_id=comment.post_id,
                removed=removed,
            )
            return comment, removed

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=comment_id):
            async with self.unit_of_work.transaction():
                comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def get_comments_by_author(
        self, author_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        """Get an author's comments, newest first."""
        async with self.unit_of_work.transaction():
            return await self.comment_repository.find_by_author(
                author_id, limit=limit, offset=offset
            )

    async def update_content(
        self,
        comment_id: CommentId,
        user_id: UserId,
        content: str,
        post_id: PostId | None = None,
    ) -> Comment:
        """Replace the content of a comment on behalf of its author.

        Args:
            comment_id: Comment ID
            user_id: Acting user, who must be the comment's author
            content: New text
            post_id: When given, the post the comment must belong to

        Raises:
            NotFoundError: If the comment does not exist
            ValidationError: If the comment belongs to another post
            NotAuthorizedError: If the user is not the comment's author
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=comment_id,
            content_length=len(content),
        ):
            async with self.unit_of_work.transaction():
                comment = await self._lock_own_comment(comment_id, user_id)
                if post_id is not None and comment.post_id != post_id:
                    raise ValidationError(
                        f"Comment {comment_id} does not belong to post {post_id}"
                    )
                updated = await self.comment_repository.update_content(
                    comment_id, content
                )
            if updated is None:
                logfire.warn("Comment not found for update", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment content updated", comment_id=comment_id)
            return updated

    async def _lock_own_comment(self, comment_id: CommentId, user_id: UserId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=comment_id)
            raise NotFoundError("Comment", str(comment_id))

        await self.post_repository.lock(comment.post_id)
        if not await self.comment_repository.lock(comment_id):
            # Deleted while we waited
            raise NotFoundError("Comment", str(comment_id))

        if comment.author_id != user_id:
            logfire.warn(
                "Comment change by non-author", comment_id=comment_id, user_id=user_id
            )
            raise NotAuthorizedError("comment", str(comment_id), str(user_id))
        return comment
