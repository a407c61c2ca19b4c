"""PostgreSQL transaction runner.

Each unit of work runs in a SAVEPOINT on the request-scoped session. The
session itself is committed (or rolled back) by the DI provider at the end
of the request, so a failed unit of work only discards its own writes.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.error import StorageConflictError
from pickme.domain.repository import TransactionRunner

T = TypeVar("T")

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


class PostgresTransactionRunner(TransactionRunner):
    """Runs units of work in nested transactions on one session."""

    def __init__(
        self,
        session: AsyncSession,
        max_retries: int = 3,
        backoff_seconds: float = 0.05,
    ) -> None:
        """Initialize runner.

        Args:
            session: Request-scoped SQLAlchemy async session
            max_retries: Extra attempts after a storage conflict
            backoff_seconds: Base delay between attempts
        """
        super().__init__(max_retries=max_retries, backoff_seconds=backoff_seconds)
        self.session = session

    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        try:
            async with self.session.begin_nested():
                return await work()
        except DBAPIError as e:
            if _sqlstate(e) in RETRYABLE_SQLSTATES:
                raise StorageConflictError(str(e)) from e
            raise
