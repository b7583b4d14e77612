"""PostgreSQL implementation of Save repository."""

from collections.abc import Sequence
from typing import List

from sqlalchemy import Table, and_, delete, desc, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment, Post, SaveRecord
from agora.domain.repository import SaveRepository
from agora.domain.value import Target, TargetKind, UserId
from agora.persistence.errors import store_call
from agora.persistence.mappers import row_to_comment, row_to_post
from agora.persistence.tables import comments_table, posts_table, saves_table


def _matches(user_id: UserId, target: Target):
    return and_(
        saves_table.c.user_id == user_id,
        saves_table.c.target_kind == target.kind.value,
        saves_table.c.target_id == target.id,
    )


class PostgresSaveRepository(SaveRepository):
    """PostgreSQL implementation of SaveRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_call
    async def exists(self, user_id: UserId, target: Target, for_update: bool = False) -> bool:
        """Check whether the user has saved the target."""
        stmt = select(saves_table.c.user_id).where(_matches(user_id, target))
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.first() is not None

    @store_call
    async def insert(self, record: SaveRecord) -> bool:
        """Insert a save record; a concurrent duplicate is ignored."""
        stmt = (
            pg_insert(saves_table)
            .values(
                user_id=record.user_id,
                target_kind=record.target.kind.value,
                target_id=record.target.id,
            )
            .on_conflict_do_nothing(
                index_elements=["user_id", "target_kind", "target_id"]
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    @store_call
    async def delete(self, user_id: UserId, target: Target) -> bool:
        """Delete a save record."""
        stmt = delete(saves_table).where(_matches(user_id, target))
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    @store_call
    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        """Delete every save record on the given targets."""
        if not target_ids:
            return 0
        stmt = delete(saves_table).where(
            and_(
                saves_table.c.target_kind == kind.value,
                saves_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    @store_call
    async def find_saved_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Post]:
        """Find the posts a user has saved."""
        stmt = _saved(posts_table, TargetKind.POST, user_id, limit, offset)
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    @store_call
    async def find_saved_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find the comments a user has saved."""
        stmt = _saved(comments_table, TargetKind.COMMENT, user_id, limit, offset)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]


def _saved(table: Table, kind: TargetKind, user_id: UserId, limit: int, offset: int):
    return (
        select(table)
        .join(saves_table, saves_table.c.target_id == table.c.id)
        .where(
            saves_table.c.user_id == user_id,
            saves_table.c.target_kind == kind.value,
        )
        .order_by(desc(saves_table.c.created_at), desc(saves_table.c.target_id))
        .limit(limit)
        .offset(offset)
    )
