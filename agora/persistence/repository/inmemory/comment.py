"""In-memory comment repository for testing."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Optional

from agora.domain.model.comment import Comment
from agora.domain.model.thread import CommentRow
from agora.domain.repository.comment import CommentRepository
from agora.domain.value import CommentId, PostId, UserId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        await self.store.checkpoint()
        return self.store.comments.get(comment_id)

    async def find_by_author(
        self, author_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        """Find comments by a specific author."""
        await self.store.checkpoint()
        comments = [c for c in self.store.comments.values() if c.author_id == author_id]

        # Newest first
        comments.sort(key=lambda c: (c.created_at, c.id), reverse=True)

        # Paginate
        return comments[offset : offset + limit]

    async def find_top_level_ids(self, post_id: PostId) -> list[CommentId]:
        """Find IDs of comments that have no ancestor."""
        await self.store.checkpoint()
        nested = {
            descendant
            for (_, descendant), path_length in self.store.paths.items()
            if path_length > 0
        }
        return sorted(
            c.id
            for c in self.store.comments.values()
            if c.post_id == post_id and c.id not in nested
        )

    def _breadcrumb(self, comment_id: CommentId) -> str:
        ancestors = sorted(
            (
                (path_length, ancestor)
                for (ancestor, descendant), path_length in self.store.paths.items()
                if descendant == comment_id
            ),
            reverse=True,
        )
        return ",".join(f"{ancestor:019d}" for _, ancestor in ancestors)

    async def find_subtree_rows(
        self, top_level_ids: Sequence[CommentId]
    ) -> list[CommentRow]:
        """Fetch every comment under the given top-level comments, in preorder."""
        await self.store.checkpoint()
        roots = set(top_level_ids)
        rows = []
        for (ancestor, descendant), path_length in self.store.paths.items():
            if ancestor not in roots:
                continue
            comment = self.store.comments[descendant]
            rows.append(
                CommentRow(
                    **comment.model_dump(),
                    path_length=path_length,
                    ancestor_id=ancestor,
                    descendant_id=descendant,
                    breadcrumb=self._breadcrumb(descendant),
                )
            )
        rows.sort(key=lambda row: row.breadcrumb)
        return rows

    async def insert(
        self, post_id: PostId, author_id: UserId, author_name: str, content: str
    ) -> Comment:
        """Insert a comment row."""
        await self.store.checkpoint()
        now = datetime.now(UTC)
        comment = Comment(
            id=CommentId(self.store.next_id("comments")),
            post_id=post_id,
            author_id=author_id,
            author_name=author_name,
            content=content,
            likes=0,
            created_at=now,
            updated_at=now,
        )
        self.store.comments[comment.id] = comment
        return comment

    async def insert_closure_edges(
        self, comment_id: CommentId, parent_id: Optional[CommentId]
    ) -> int:
        """Insert the new comment's ancestor edges and self-edge."""
        await self.store.checkpoint()
        edges = {(comment_id, comment_id): 0}
        if parent_id is not None:
            for (ancestor, descendant), path_length in self.store.paths.items():
                if descendant == parent_id:
                    edges[(ancestor, comment_id)] = path_length + 1
        self.store.paths.update(edges)
        return len(edges)

    async def find_subtree_ids(self, comment_id: CommentId) -> list[CommentId]:
        """Find a comment and all of its descendants."""
        await self.store.checkpoint()
        return [
            descendant
            for path_length, descendant in sorted(
                (path_length, descendant)
                for (ancestor, descendant), path_length in self.store.paths.items()
                if ancestor == comment_id
            )
        ]

    async def delete_closure_edges(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every edge whose descendant is in comment_ids."""
        await self.store.checkpoint()
        doomed = set(comment_ids)
        edges = [edge for edge in self.store.paths if edge[1] in doomed]
        for edge in edges:
            del self.store.paths[edge]
        return len(edges)

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comment rows."""
        await self.store.checkpoint()
        removed = 0
        for comment_id in set(comment_ids):
            if self.store.comments.pop(comment_id, None) is not None:
                removed += 1
        return removed

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Update the content of a comment."""
        await self.store.checkpoint()
        comment = self.store.comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={"content": content, "updated_at": datetime.now(UTC)}
        )
        self.store.comments[comment_id] = updated
        return updated

    async def find_ids_for_post(self, post_id: PostId) -> list[CommentId]:
        """Find the IDs of every comment on a post."""
        await self.store.checkpoint()
        return sorted(c.id for c in self.store.comments.values() if c.post_id == post_id)

    async def lock(self, target_id: int) -> bool:
        """Take the comment's row lock, then report whether it still exists."""
        await self.store.checkpoint()
        await self.store.lock_row(("comments", target_id))
        return CommentId(target_id) in self.store.comments

    async def lock_many(self, comment_ids: Sequence[CommentId]) -> list[CommentId]:
        """Take row locks in ascending ID order."""
        await self.store.checkpoint()
        for comment_id in sorted(set(comment_ids)):
            await self.store.lock_row(("comments", comment_id))
        return sorted(c for c in set(comment_ids) if c in self.store.comments)

    async def adjust_likes(self, target_id: int, delta: int) -> None:
        """Add delta to the like counter."""
        await self.store.checkpoint()
        comment = self.store.comments.get(CommentId(target_id))
        if comment:
            self.store.comments[comment.id] = comment.model_copy(
                update={"likes": comment.likes + delta}
            )
