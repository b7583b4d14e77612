"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agora.config import DatabaseSettings, Settings
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.persistence.database import create_engine, create_session_factory
from agora.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresSaveRepository,
    PostgresVoteRepository,
)
from agora.persistence.unit_of_work import SqlAlchemyUnitOfWork
from agora.util.di.base import ProviderBase
from agora.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Transactions are opened and committed by the unit of work; anything
        still open when the request ends is rolled back on close.
        """
        async with session_factory() as session:
            yield session
            if session.in_transaction():
                logfire.warn("Session closed with an open transaction")

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(
        self, session: AsyncSession, database: DatabaseSettings
    ) -> UnitOfWork:
        """Provide the unit of work bound to the request session."""
        return SqlAlchemyUnitOfWork(session, database.operation_timeout)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_save_repository(self, session: AsyncSession) -> SaveRepository:
        """Provide Save repository."""
        return PostgresSaveRepository(session)
