"""Post domain service."""

import logfire

from agora.domain.error import NotAuthorizedError, NotFoundError
from agora.domain.model.post import Post
from agora.domain.model.vote import VoteRecord
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.domain.value import PostId, Score, Target, TargetKind, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        save_repository: SaveRepository,
    ) -> None:
        """Initialize post service.

        Args:
            unit_of_work: Transaction boundary
            post_repository: Post repository
            vote_repository: Vote repository
            comment_repository: Comment repository (delete cascade)
            save_repository: Save repository (delete cascade)
        """
        self.unit_of_work = unit_of_work
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.comment_repository = comment_repository
        self.save_repository = save_repository

    async def create_post(
        self, author_id: UserId, author_name: str, title: str, content: str
    ) -> Post:
        """Create a post liked by its author.

        Returns:
            Created post
        """
        with logfire.span("post_service.create_post", author_id=author_id):
            async with self.unit_of_work.transaction():
                post = await self.post_repository.insert(
                    author_id=author_id,
                    author_name=author_name,
                    title=title,
                    content=content,
                )
                await self.vote_repository.insert(
                    VoteRecord(
                        user_id=author_id, target=Target.post(post.id), score=Score.LIKE
                    )
                )
                await self.post_repository.adjust_likes(post.id, 1)

            logfire.info("Post created", post_id=post.id, author_id=author_id)
            return post.model_copy(update={"likes": post.likes + 1})

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.get_post", post_id=post_id):
            async with self.unit_of_work.transaction():
                post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=post_id)
                raise NotFoundError("Post", str(post_id))
            return post

    async def update_post(self, post_id: PostId, title: str, content: str) -> Post:
        """Update a post's title and content.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.update_post", post_id=post_id):
            async with self.unit_of_work.transaction():
                updated = await self.post_repository.update(post_id, title, content)
            if updated is None:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post updated", post_id=post_id)
            return updated

    async def delete_post(self, post_id: PostId, user_id: UserId) -> int:
        """Delete a post with every comment on it.

        Comment rows, their closure edges, and the votes and saves on the
        post and its comments all go in one transaction.

        Args:
            post_id: Post ID
            user_id: Acting user, who must be the post's author

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the post's author
        """
        with logfire.span("post_service.delete_post", post_id=post_id, user_id=user_id):
            async with self.unit_of_work.transaction():
                # Blocks new comments and votes on the post until commit
                if not await self.post_repository.lock(post_id):
                    logfire.warn("Delete of non-existent post", post_id=post_id)
                    raise NotFoundError("Post", str(post_id))
                post = await self.post_repository.find_by_id(post_id)
                if post is None:
                    raise NotFoundError("Post", str(post_id))
                if post.author_id != user_id:
                    logfire.warn(
                        "Post delete by non-author", post_id=post_id, user_id=user_id
                    )
                    raise NotAuthorizedError("post", str(post_id), str(user_id))

                comment_ids = await self.comment_repository.find_ids_for_post(post_id)
                await self.comment_repository.lock_many(comment_ids)
                await self.comment_repository.delete_closure_edges(comment_ids)
                await self.vote_repository.delete_for_targets(
                    TargetKind.COMMENT, comment_ids
                )
                await self.save_repository.delete_for_targets(
                    TargetKind.COMMENT, comment_ids
                )
                removed = await self.comment_repository.delete_many(comment_ids)

                await self.vote_repository.delete_for_targets(TargetKind.POST, [post_id])
                await self.save_repository.delete_for_targets(TargetKind.POST, [post_id])
                await self.post_repository.delete(post_id)

            logfire.info("Post deleted", post_id=post_id, comments_removed=removed)
            return removed
