"""Mock persistence providers for testing."""

from dishka import Scope, provide

from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    SaveRepository,
    UnitOfWork,
    VoteRepository,
)
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemorySaveRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)
from agora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets a fresh
    store shared by its unit of work and repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_store(self) -> InMemoryStore:
        """Provide the in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, store: InMemoryStore) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return InMemoryUnitOfWork(store)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, store: InMemoryStore) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, store: InMemoryStore) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, store: InMemoryStore) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_save_repository(self, store: InMemoryStore) -> SaveRepository:
        """Provide in-memory save repository."""
        return InMemorySaveRepository(store)
