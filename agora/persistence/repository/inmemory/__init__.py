"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .save import InMemorySaveRepository
from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemorySaveRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryVoteRepository",
]
