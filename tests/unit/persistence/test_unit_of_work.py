"""Unit tests for the SQLAlchemy unit of work."""

import asyncio

import pytest
from sqlalchemy import exc as sa_exc

from agora.domain.error import (
    ConstraintViolationError,
    NotFoundError,
    StoreTimeoutError,
    TransactionFailureError,
    UnknownStoreError,
)
from agora.persistence.unit_of_work import SqlAlchemyUnitOfWork


class FakeSession:
    """Records transaction calls made on an AsyncSession."""

    def __init__(self, begin_error=None, commit_error=None) -> None:
        self.calls: list[str] = []
        self.begin_error = begin_error
        self.commit_error = commit_error

    async def begin(self) -> None:
        self.calls.append("begin")
        if self.begin_error:
            raise self.begin_error

    async def commit(self) -> None:
        self.calls.append("commit")
        if self.commit_error:
            raise self.commit_error

    async def rollback(self) -> None:
        self.calls.append("rollback")


class TestSqlAlchemyUnitOfWork:
    """Tests for SqlAlchemyUnitOfWork.transaction."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self):
        session = FakeSession()
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        async with unit_of_work.transaction():
            pass

        assert session.calls == ["begin", "commit"]

    @pytest.mark.asyncio
    async def test_domain_error_rolls_back_and_propagates(self):
        session = FakeSession()
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        with pytest.raises(NotFoundError):
            async with unit_of_work.transaction():
                raise NotFoundError("Post", "1")

        assert session.calls == ["begin", "rollback"]

    @pytest.mark.asyncio
    async def test_deadline_rolls_back_with_timeout_error(self):
        session = FakeSession()
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=0.01)

        with pytest.raises(StoreTimeoutError):
            async with unit_of_work.transaction():
                await asyncio.sleep(1)

        assert session.calls == ["begin", "rollback"]

    @pytest.mark.asyncio
    async def test_begin_failure(self):
        session = FakeSession(begin_error=sa_exc.OperationalError("BEGIN", {}, Exception()))
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        with pytest.raises(TransactionFailureError):
            async with unit_of_work.transaction():
                pass

    @pytest.mark.asyncio
    async def test_commit_integrity_error_is_constraint_violation(self):
        session = FakeSession(
            commit_error=sa_exc.IntegrityError("COMMIT", {}, Exception("pk_saves"))
        )
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        with pytest.raises(ConstraintViolationError):
            async with unit_of_work.transaction():
                pass

        assert session.calls == ["begin", "commit", "rollback"]

    @pytest.mark.asyncio
    async def test_commit_failure_is_transaction_failure(self):
        session = FakeSession(
            commit_error=sa_exc.OperationalError("COMMIT", {}, Exception("gone"))
        )
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        with pytest.raises(TransactionFailureError):
            async with unit_of_work.transaction():
                pass

    @pytest.mark.asyncio
    async def test_untranslated_statement_error_is_unknown(self):
        session = FakeSession()
        unit_of_work = SqlAlchemyUnitOfWork(session, operation_timeout=1)

        with pytest.raises(UnknownStoreError):
            async with unit_of_work.transaction():
                raise sa_exc.OperationalError("SELECT 1", {}, Exception("boom"))

        assert session.calls == ["begin", "rollback"]
