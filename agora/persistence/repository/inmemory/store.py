"""Shared state for the in-memory repositories.

All in-memory repositories of one container scope share an InMemoryStore,
so a unit of work can snapshot and restore every table at once.

Row locks mirror ``SELECT ... FOR UPDATE``: a lock taken inside a
transaction is held until that transaction ends, and taking it again in
the same transaction is a no-op.
"""

import asyncio
import copy
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any

from agora.domain.model import Comment, Post
from agora.domain.value import CommentId, PostId, Score, TargetKind, UserId

VoteKey = tuple[UserId, TargetKind, int]

_TABLES = ("posts", "comments", "paths", "votes", "saves", "sequences")

# Row locks held by the transaction running in the current task
_held_row_locks: ContextVar[list[asyncio.Lock] | None] = ContextVar(
    "held_row_locks", default=None
)


class InMemoryStore:
    """In-memory tables for tests."""

    def __init__(self) -> None:
        self.posts: dict[PostId, Post] = {}
        self.comments: dict[CommentId, Comment] = {}
        # (ancestor, descendant) -> path_length
        self.paths: dict[tuple[CommentId, CommentId], int] = {}
        # Insertion order is creation order
        self.votes: dict[VoteKey, Score] = {}
        self.saves: dict[VoteKey, None] = {}
        self.sequences: dict[str, int] = {"posts": 0, "comments": 0}
        # Held for the whole of a serialized transaction
        self.lock = asyncio.Lock()
        self.row_locks: dict[Hashable, asyncio.Lock] = {}

    def next_id(self, table: str) -> int:
        self.sequences[table] += 1
        return self.sequences[table]

    def snapshot(self) -> dict[str, Any]:
        # Rows are immutable models, so copying the containers is enough
        return {name: copy.copy(getattr(self, name)) for name in _TABLES}

    def restore(self, snapshot: dict[str, Any]) -> None:
        for name, table in snapshot.items():
            setattr(self, name, table)

    async def checkpoint(self) -> None:
        """Yield to the event loop, as a real driver does on every call."""
        await asyncio.sleep(0)

    @asynccontextmanager
    async def row_lock_scope(self) -> AsyncIterator[None]:
        """Release every row lock taken inside the block when it exits."""
        held: list[asyncio.Lock] = []
        token = _held_row_locks.set(held)
        try:
            yield
        finally:
            _held_row_locks.reset(token)
            for lock in reversed(held):
                lock.release()

    async def lock_row(self, key: Hashable) -> None:
        """Take the row lock for ``key`` until the current transaction ends.

        Outside a transaction nothing is locked.
        """
        held = _held_row_locks.get()
        if held is None:
            return
        lock = self.row_locks.setdefault(key, asyncio.Lock())
        if lock in held:
            return
        await lock.acquire()
        held.append(lock)
