"""PostgreSQL implementation of Vote repository."""

from collections.abc import Sequence
from typing import Dict, List, Optional

from sqlalchemy import Table, and_, delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment, Post, VoteRecord
from agora.domain.repository import VoteRepository
from agora.domain.value import Score, Target, TargetKind, UserId
from agora.persistence.errors import store_call
from agora.persistence.mappers import row_to_comment, row_to_post, vote_to_dict
from agora.persistence.tables import comments_table, posts_table, votes_table


def _matches(user_id: UserId, target: Target):
    return and_(
        votes_table.c.user_id == user_id,
        votes_table.c.target_kind == target.kind.value,
        votes_table.c.target_id == target.id,
    )


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @store_call
    async def find_score(
        self, user_id: UserId, target: Target, for_update: bool = False
    ) -> Optional[Score]:
        """Find a user's score on a target."""
        stmt = select(votes_table.c.score).where(_matches(user_id, target))
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        score = result.scalar_one_or_none()
        return Score(score) if score is not None else None

    @store_call
    async def insert(self, vote: VoteRecord) -> VoteRecord:
        """Insert a vote record (raises on duplicate)."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        return vote

    @store_call
    async def update_score(self, user_id: UserId, target: Target, score: Score) -> bool:
        """Change the score of an existing vote."""
        stmt = (
            update(votes_table)
            .where(_matches(user_id, target))
            .values(score=int(score), updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    @store_call
    async def find_scores(
        self, user_id: UserId, kind: TargetKind, target_ids: Sequence[int]
    ) -> Dict[int, Score]:
        """Find a user's scores on multiple targets (batch query)."""
        if not target_ids:
            return {}

        stmt = select(votes_table.c.target_id, votes_table.c.score).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_kind == kind.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {row.target_id: Score(row.score) for row in result.fetchall()}

    @store_call
    async def delete_for_targets(self, kind: TargetKind, target_ids: Sequence[int]) -> int:
        """Delete every vote on the given targets."""
        if not target_ids:
            return 0
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.target_kind == kind.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    @store_call
    async def find_liked_posts(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Post]:
        """Find the posts a user currently likes."""
        stmt = _liked(posts_table, TargetKind.POST, user_id, limit, offset)
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    @store_call
    async def find_liked_comments(
        self, user_id: UserId, limit: int = 30, offset: int = 0
    ) -> List[Comment]:
        """Find the comments a user currently likes."""
        stmt = _liked(comments_table, TargetKind.COMMENT, user_id, limit, offset)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]


def _liked(table: Table, kind: TargetKind, user_id: UserId, limit: int, offset: int):
    return (
        select(table)
        .join(votes_table, votes_table.c.target_id == table.c.id)
        .where(
            votes_table.c.user_id == user_id,
            votes_table.c.target_kind == kind.value,
            votes_table.c.score == int(Score.LIKE),
        )
        .order_by(desc(votes_table.c.created_at), desc(votes_table.c.target_id))
        .limit(limit)
        .offset(offset)
    )
