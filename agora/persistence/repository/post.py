"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post
from agora.domain.repository import PostRepository
from agora.domain.value import PostId, UserId
from agora.persistence.errors import store_call
from agora.persistence.mappers import row_to_post
from agora.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_call
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    @store_call
    async def insert(
        self, author_id: UserId, author_name: str, title: str, content: str
    ) -> Post:
        """Insert a new post."""
        stmt = (
            insert(posts_table)
            .values(
                author_id=author_id,
                author_name=author_name,
                title=title,
                content=content,
            )
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        return row_to_post(result.one()._asdict())

    @store_call
    async def update(self, post_id: PostId, title: str, content: str) -> Optional[Post]:
        """Update title and content."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(title=title, content=content, updated_at=func.now())
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    @store_call
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    @store_call
    async def lock(self, target_id: int) -> bool:
        """Lock the post row (SELECT ... FOR UPDATE)."""
        stmt = (
            select(posts_table.c.id)
            .where(posts_table.c.id == target_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @store_call
    async def adjust_likes(self, target_id: int, delta: int) -> None:
        """Atomically add delta to the like counter."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == target_id)
            .values(likes=posts_table.c.likes + delta)
        )
        await self.session.execute(stmt)

    @store_call
    async def adjust_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add delta to num_comments."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(num_comments=posts_table.c.num_comments + delta)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            logfire.warn("Comment count update matched no post", post_id=post_id)
