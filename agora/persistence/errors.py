"""Translation of SQLAlchemy / driver failures into domain store errors."""

import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy import exc as sa_exc

from agora.domain.error import (
    ConstraintViolationError,
    StoreError,
    StoreTimeoutError,
    UnknownStoreError,
)

# PostgreSQL "query_canceled", raised when statement_timeout expires
QUERY_CANCELED = "57014"

P = ParamSpec("P")
R = TypeVar("R")


def _sqlstate(error: sa_exc.DBAPIError) -> str | None:
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def translate_store_error(error: BaseException) -> StoreError:
    """Map a store failure to the matching StoreError.

    Args:
        error: Exception raised by SQLAlchemy, the driver or a deadline

    Returns:
        StoreError subclass describing the failure
    """
    if isinstance(error, StoreError):
        return error
    if isinstance(error, (TimeoutError, sa_exc.TimeoutError)):
        return StoreTimeoutError(f"store call timed out: {error}")
    if isinstance(error, sa_exc.IntegrityError):
        return ConstraintViolationError(str(error.orig))
    if isinstance(error, sa_exc.DBAPIError) and _sqlstate(error) == QUERY_CANCELED:
        return StoreTimeoutError(f"statement timed out: {error.orig}")
    return UnknownStoreError(f"{type(error).__name__}: {error}")


def store_call(method: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Decorate a repository method so SQLAlchemy errors leave it as StoreErrors."""

    @functools.wraps(method)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await method(*args, **kwargs)
        except sa_exc.SQLAlchemyError as e:
            raise translate_store_error(e) from e

    return wrapper
