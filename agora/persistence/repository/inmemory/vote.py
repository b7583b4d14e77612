"""In-memory vote repository for testing."""

from collections.abc import Sequence
from typing import Dict, Optional

from agora.domain.error import ConstraintViolationError
from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.vote import VoteRecord
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import CommentId, PostId, Score, Target, TargetKind, UserId

from .store import InMemoryStore, VoteKey


def _key(user_id: UserId, target: Target) -> VoteKey:
    return (user_id, target.kind, target.id)


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_score(
        self, user_id: UserId, target: Target, for_update: bool = False
    ) -> Optional[Score]:
        await self.store.checkpoint()
        key = _key(user_id, target)
        # FOR UPDATE locks nothing when the row is absent
        if for_update and key in self.store.votes:
            await self.store.lock_row(("votes",) + key)
        return self.store.votes.get(key)

    async def insert(self, vote: VoteRecord) -> VoteRecord:
        await self.store.checkpoint()
        key = _key(vote.user_id, vote.target)
        if key in self.store.votes:
            raise ConstraintViolationError(f"duplicate vote: {vote.target}")
        self.store.votes[key] = vote.score
        return vote

    async def update_score(self, user_id: UserId, target: Target, score: Score) -> bool:
        await self.store.checkpoint()
        key = _key(user_id, target)
        if key not in self.store.votes:
            return False
        self.store.votes[key] = score
        return True

    async def find_scores(
        self, user_id: UserId, kind: TargetKind, target_ids: Sequence[int]
    ) -> Dict[int, Score]:
        await self.store.checkpoint()
        return {
            target_id: self.store.votes[(user_id, kind, target_id)]
            for target_id in target_ids
            if (user_id, kind, target_id) in self.store.votes
        }

    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        await self.store.checkpoint()
        doomed = set(target_ids)
        keys = [k for k in self.store.votes if k[1] == kind and k[2] in doomed]
        for key in keys:
            del self.store.votes[key]
        return len(keys)

    def _liked_ids(self, user_id: UserId, kind: TargetKind) -> list[int]:
        # Newest vote first
        return [
            target_id
            for (voter, target_kind, target_id), score in reversed(self.store.votes.items())
            if voter == user_id and target_kind == kind and score == Score.LIKE
        ]

    async def find_liked_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Post]:
        await self.store.checkpoint()
        ids = self._liked_ids(user_id, TargetKind.POST)
        posts = [self.store.posts[PostId(i)] for i in ids if PostId(i) in self.store.posts]
        return posts[offset : offset + limit]

    async def find_liked_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        await self.store.checkpoint()
        ids = self._liked_ids(user_id, TargetKind.COMMENT)
        comments = [
            self.store.comments[CommentId(i)]
            for i in ids
            if CommentId(i) in self.store.comments
        ]
        return comments[offset : offset + limit]
