"""In-memory save repository for testing."""

from collections.abc import Sequence

from agora.domain.model.comment import Comment
from agora.domain.model.post import Post
from agora.domain.model.save import SaveRecord
from agora.domain.repository.save import SaveRepository
from agora.domain.value import CommentId, PostId, Target, TargetKind, UserId

from .store import InMemoryStore


class InMemorySaveRepository(SaveRepository):
    """In-memory implementation of SaveRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def exists(self, user_id: UserId, target: Target, for_update: bool = False) -> bool:
        await self.store.checkpoint()
        key = (user_id, target.kind, target.id)
        if for_update and key in self.store.saves:
            await self.store.lock_row(("saves",) + key)
        return key in self.store.saves

    async def insert(self, record: SaveRecord) -> bool:
        await self.store.checkpoint()
        key = (record.user_id, record.target.kind, record.target.id)
        if key in self.store.saves:
            return False
        self.store.saves[key] = None
        return True

    async def delete(self, user_id: UserId, target: Target) -> bool:
        await self.store.checkpoint()
        key = (user_id, target.kind, target.id)
        if key not in self.store.saves:
            return False
        del self.store.saves[key]
        return True

    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        await self.store.checkpoint()
        doomed = set(target_ids)
        keys = [k for k in self.store.saves if k[1] == kind and k[2] in doomed]
        for key in keys:
            del self.store.saves[key]
        return len(keys)

    def _saved_ids(self, user_id: UserId, kind: TargetKind) -> list[int]:
        # Newest save first
        return [
            target_id
            for saver, target_kind, target_id in reversed(self.store.saves)
            if saver == user_id and target_kind == kind
        ]

    async def find_saved_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Post]:
        await self.store.checkpoint()
        ids = self._saved_ids(user_id, TargetKind.POST)
        posts = [self.store.posts[PostId(i)] for i in ids if PostId(i) in self.store.posts]
        return posts[offset : offset + limit]

    async def find_saved_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        await self.store.checkpoint()
        ids = self._saved_ids(user_id, TargetKind.COMMENT)
        comments = [
            self.store.comments[CommentId(i)]
            for i in ids
            if CommentId(i) in self.store.comments
        ]
        return comments[offset : offset + limit]
