"""SQLAlchemy unit of work."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import (
    ConstraintViolationError,
    DomainError,
    StoreTimeoutError,
    TransactionFailureError,
)
from agora.domain.repository import UnitOfWork
from agora.persistence.errors import translate_store_error


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request's AsyncSession.

    Repositories share the same session, so every statement they issue
    inside ``transaction()`` belongs to that transaction.
    """

    def __init__(self, session: AsyncSession, operation_timeout: float) -> None:
        """Initialize unit of work.

        Args:
            session: SQLAlchemy async session shared with the repositories
            operation_timeout: Deadline in seconds for one transaction
        """
        self.session = session
        self.operation_timeout = operation_timeout

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            async with asyncio.timeout(self.operation_timeout):
                try:
                    await self.session.begin()
                except sa_exc.SQLAlchemyError as e:
                    raise TransactionFailureError(
                        f"failed to start transaction: {e}"
                    ) from e

                try:
                    yield
                except BaseException:
                    await self._rollback()
                    raise

                try:
                    await self.session.commit()
                except sa_exc.IntegrityError as e:
                    await self._rollback()
                    raise ConstraintViolationError(str(e.orig)) from e
                except sa_exc.SQLAlchemyError as e:
                    await self._rollback()
                    raise TransactionFailureError(
                        f"failed to commit transaction: {e}"
                    ) from e
        except TimeoutError as e:
            logfire.warn(
                "Transaction deadline exceeded", timeout=self.operation_timeout
            )
            raise StoreTimeoutError(
                f"operation exceeded {self.operation_timeout}s deadline"
            ) from e
        except DomainError:
            raise
        except sa_exc.SQLAlchemyError as e:
            raise translate_store_error(e) from e

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except sa_exc.SQLAlchemyError as e:
            # The original failure is being raised; record this one only
            logfire.error("Transaction rollback failed", error=str(e))
