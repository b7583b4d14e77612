"""PostgreSQL implementation of Comment repository.

Threads live in the ``comment_paths`` closure table. Subtrees are read in
one query whose rows are ordered by breadcrumb, the root-to-node chain of
ancestor ids. Ids in the breadcrumb are zero-padded so that siblings sort
by id (creation order) rather than by their decimal text.
"""

from collections.abc import Sequence
from typing import List, Optional

from sqlalchemy import (
    BigInteger,
    Integer,
    Text,
    cast,
    delete,
    desc,
    exists,
    func,
    insert,
    literal,
    literal_column,
    select,
    union_all,
    update,
)
from sqlalchemy.dialects.postgresql import aggregate_order_by
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment, CommentRow
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, PostId, UserId
from agora.persistence.errors import store_call
from agora.persistence.mappers import row_to_comment, row_to_comment_row
from agora.persistence.tables import comment_paths_table, comments_table

# Digits of the largest BIGINT
BREADCRUMB_ID_WIDTH = 19


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_call
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @store_call
    async def find_by_author(
        self, author_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find comments by a specific author."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    @store_call
    async def find_top_level_ids(self, post_id: PostId) -> List[CommentId]:
        """Find IDs of comments that have no ancestor."""
        paths = comment_paths_table
        has_ancestor = exists(
            select(literal(1)).where(
                paths.c.descendant == comments_table.c.id,
                paths.c.path_length > 0,
            )
        )
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.post_id == post_id)
            .where(~has_ancestor)
            .order_by(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [CommentId(comment_id) for comment_id in result.scalars().all()]

    @store_call
    async def find_subtree_rows(
        self, top_level_ids: Sequence[CommentId]
    ) -> List[CommentRow]:
        """Fetch every comment under the given top-level comments, in preorder."""
        if not top_level_ids:
            return []

        p = comment_paths_table.alias("p")
        crumbs = comment_paths_table.alias("crumbs")

        # Root-to-node chain: the farthest ancestor has the longest path
        padded_ancestor = func.lpad(
            cast(crumbs.c.ancestor, Text), BREADCRUMB_ID_WIDTH, "0"
        )
        breadcrumb = func.string_agg(
            padded_ancestor,
            aggregate_order_by(literal_column("','"), crumbs.c.path_length.desc()),
        ).label("breadcrumb")

        stmt = (
            select(
                comments_table.c.id,
                comments_table.c.post_id,
                comments_table.c.author_id,
                comments_table.c.author_name,
                comments_table.c.content,
                comments_table.c.likes,
                comments_table.c.created_at,
                comments_table.c.updated_at,
                p.c.path_length,
                p.c.ancestor.label("ancestor_id"),
                p.c.descendant.label("descendant_id"),
                breadcrumb,
            )
            .select_from(
                comments_table.join(p, comments_table.c.id == p.c.descendant).join(
                    crumbs, crumbs.c.descendant == p.c.descendant
                )
            )
            .where(p.c.ancestor.in_(top_level_ids))
            .group_by(
                comments_table.c.id,
                p.c.path_length,
                p.c.ancestor,
                p.c.descendant,
            )
            .order_by(breadcrumb)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment_row(row._asdict()) for row in result.fetchall()]

    @store_call
    async def insert(
        self, post_id: PostId, author_id: UserId, author_name: str, content: str
    ) -> Comment:
        """Insert a comment row."""
        stmt = (
            insert(comments_table)
            .values(
                post_id=post_id,
                author_id=author_id,
                author_name=author_name,
                content=content,
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        return row_to_comment(result.one()._asdict())

    @store_call
    async def insert_closure_edges(
        self, comment_id: CommentId, parent_id: Optional[CommentId]
    ) -> int:
        """Insert the new comment's ancestor edges and self-edge."""
        paths = comment_paths_table
        self_edge = select(
            literal(comment_id, BigInteger).label("ancestor"),
            literal(comment_id, BigInteger).label("descendant"),
            literal(0, Integer).label("path_length"),
        )

        if parent_id is None:
            source = self_edge
        else:
            ancestors = select(
                paths.c.ancestor,
                literal(comment_id, BigInteger),
                paths.c.path_length + 1,
            ).where(paths.c.descendant == parent_id)
            source = union_all(ancestors, self_edge)

        stmt = insert(paths).from_select(
            ["ancestor", "descendant", "path_length"], source
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    @store_call
    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Find a comment and all of its descendants."""
        paths = comment_paths_table
        stmt = (
            select(paths.c.descendant)
            .where(paths.c.ancestor == comment_id)
            .order_by(paths.c.path_length, paths.c.descendant)
        )
        result = await self.session.execute(stmt)
        return [CommentId(descendant) for descendant in result.scalars().all()]

    @store_call
    async def delete_closure_edges(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every edge whose descendant is in comment_ids."""
        if not comment_ids:
            return 0
        stmt = delete(comment_paths_table).where(
            comment_paths_table.c.descendant.in_(comment_ids)
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    @store_call
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comment rows."""
        if not comment_ids:
            return 0
        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    @store_call
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Update the content of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(content=content, updated_at=func.now())
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @store_call
    async def lock(self, target_id: int) -> bool:
        """Lock the comment row (SELECT ... FOR UPDATE)."""
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.id == target_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_call
    async def adjust_likes(self, target_id: int, delta: int) -> None:
        """Atomically add delta to the like counter."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == target_id)
            .values(likes=comments_table.c.likes + delta)
        )
        await self.session.execute(stmt)

    @store_call
    async def find_ids_for_post(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of every comment on a post."""
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [CommentId(comment_id) for comment_id in result.scalars().all()]

    @store_call
    async def lock_many(self, comment_ids: Sequence[CommentId]) -> List[CommentId]:
        """Lock comment rows in ascending ID order (SELECT ... FOR UPDATE)."""
        if not comment_ids:
            return []
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.id.in_(comment_ids))
            .order_by(comments_table.c.id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return [CommentId(comment_id) for comment_id in result.scalars().all()]
