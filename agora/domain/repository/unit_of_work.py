"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Runs a group of repository calls as one atomic transaction.

    Usage:
        async with uow.transaction():
            await comment_repository.insert(...)
            await post_repository.adjust_comment_count(...)

    Implementations must:
    - commit when the block exits normally and roll back on any exception
    - bound the whole block by the configured operation deadline
    - re-raise DomainError subclasses unchanged and translate store
      failures into StoreError subclasses
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction for the enclosed block."""
        pass
