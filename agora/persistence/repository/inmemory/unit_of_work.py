"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from agora.domain.repository import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Transactions over an InMemoryStore.

    By default transactions hold the store lock from start to end, so they
    never interleave, and the store is restored from a snapshot when the
    block raises.

    With ``serialize=False`` transactions interleave at every repository
    call, like READ COMMITTED transactions on a real database, and only the
    row locks taken by ``lock()`` and ``for_update`` reads keep them apart.
    Rollback is not modelled in that mode.
    """

    def __init__(self, store: InMemoryStore, serialize: bool = True) -> None:
        self.store = store
        self.serialize = serialize

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if not self.serialize:
            async with self.store.row_lock_scope():
                yield
            return

        async with self.store.lock, self.store.row_lock_scope():
            snapshot = self.store.snapshot()
            try:
                yield
            except BaseException:
                self.store.restore(snapshot)
                raise
