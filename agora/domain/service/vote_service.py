"""Vote domain service."""

from collections.abc import Sequence

import logfire

from agora.domain.error import NotFoundError
from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.vote import VoteOutcome, VoteRecord
from agora.domain.repository import (
    CommentRepository,
    LikeCounterRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.domain.value import Score, Target, TargetKind, UserId

from .base import Service


class VoteService(Service):
    """Domain service for the vote ledger.

    A user's state on a target is Unset, Liked or Disliked:

    | Current  | like()                    | dislike()                 |
    |----------|---------------------------|---------------------------|
    | Unset    | insert +1, counter += 1   | insert -1, counter -= 1   |
    | Liked    | no-op                     | update to -1, counter -= 2|
    | Disliked | update to +1, counter += 2| no-op                     |

    The target row is locked before the vote row is read, so concurrent
    togglers on one target run one after another and never both see an
    absent vote.
    """

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            unit_of_work: Transaction boundary
            vote_repository: Vote repository
            post_repository: Post repository (post like counters)
            comment_repository: Comment repository (comment like counters)
        """
        self.unit_of_work = unit_of_work
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    def _counter_for(self, kind: TargetKind) -> LikeCounterRepository:
        if kind == TargetKind.POST:
            return self.post_repository
        return self.comment_repository

    async def like(self, user_id: UserId, target: Target) -> VoteOutcome:
        """Like a post or comment.

        Args:
            user_id: Voting user
            target: Post or comment

        Returns:
            The vote outcome (delta 0 if already liked)

        Raises:
            NotFoundError: If the target does not exist
        """
        return await self._cast(user_id, target, Score.LIKE)

    async def dislike(self, user_id: UserId, target: Target) -> VoteOutcome:
        """Dislike a post or comment.

        Args:
            user_id: Voting user
            target: Post or comment

        Returns:
            The vote outcome (delta 0 if already disliked)

        Raises:
            NotFoundError: If the target does not exist
        """
        return await self._cast(user_id, target, Score.DISLIKE)

    async def _cast(self, user_id: UserId, target: Target, score: Score) -> VoteOutcome:
        with logfire.span(
            "vote_service.cast",
            user_id=user_id,
            target=str(target),
            score=int(score),
        ):
            counter = self._counter_for(target.kind)

            async with self.unit_of_work.transaction():
                if not await counter.lock(target.id):
                    logfire.warn("Vote on non-existent target", target=str(target))
                    raise NotFoundError(target.kind.value, str(target.id))

                previous = await self.vote_repository.find_score(
                    user_id, target, for_update=True
                )

                if previous is None:
                    await self.vote_repository.insert(
                        VoteRecord(user_id=user_id, target=target, score=score)
                    )
                    delta = int(score)
                elif previous == score:
                    delta = 0
                else:
                    await self.vote_repository.update_score(user_id, target, score)
                    delta = 2 * int(score)

                if delta:
                    await counter.adjust_likes(target.id, delta)

            outcome = VoteOutcome(
                user_id=user_id,
                target=target,
                previous=previous,
                score=score,
                delta=delta,
            )
            if outcome.changed:
                logfire.info(
                    "Vote recorded",
                    user_id=user_id,
                    target=str(target),
                    score=int(score),
                    delta=delta,
                )
            else:
                logfire.debug(
                    "Vote unchanged", user_id=user_id, target=str(target)
                )
            return outcome

    async def scores_for(
        self, user_id: UserId, kind: TargetKind, target_ids: Sequence[int]
    ) -> dict[int, Score]:
        """Look up a user's scores on several targets of one kind.

        Args:
            user_id: User ID
            kind: Target kind
            target_ids: Target IDs to check

        Returns:
            Mapping of target ID to score for the targets the user voted on
        """
        if not target_ids:
            return {}

        async with self.unit_of_work.transaction():
            return await self.vote_repository.find_scores(user_id, kind, target_ids)

    async def liked_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Post]:
        """Posts the user currently likes, most recently voted first."""
        async with self.unit_of_work.transaction():
            return await self.vote_repository.find_liked_posts(
                user_id, limit=limit, offset=offset
            )

    async def liked_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        """Comments the user currently likes, most recently voted first."""
        async with self.unit_of_work.transaction():
            return await self.vote_repository.find_liked_comments(
                user_id, limit=limit, offset=offset
            )
