"""Unit-of-work runner interface.

Lifecycle operations touch several aggregates at once (a match and its pick
request, a meetup and both users). They hand their work to a
``TransactionRunner`` so the writes land together or not at all.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

import logfire

from pickme.domain.error import ConcurrencyConflictError, StorageConflictError

T = TypeVar("T")


class TransactionRunner(ABC):
    """Runs a unit of work atomically, retrying on storage conflicts.

    ``StorageConflictError`` raised inside the work (a lost optimistic
    version check, a deadlock, a serialization failure) rolls the work back
    and runs it again from scratch. After ``max_retries`` extra attempts the
    conflict surfaces as ``ConcurrencyConflictError``. Any other exception
    rolls back and propagates unchanged.
    """

    def __init__(self, max_retries: int = 3, backoff_seconds: float = 0.05) -> None:
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds

    async def run(self, work: Callable[[], Awaitable[T]]) -> T:
        """Run ``work`` in a transaction.

        Args:
            work: Zero-argument coroutine function doing the reads and writes

        Returns:
            Whatever ``work`` returns

        Raises:
            ConcurrencyConflictError: If every attempt hit a storage conflict
        """
        attempt = 0
        while True:
            try:
                return await self._run_once(work)
            except StorageConflictError as e:
                attempt += 1
                if attempt > self.max_retries:
                    logfire.error(
                        "Transaction gave up after conflicts",
                        attempts=attempt,
                        error=str(e),
                    )
                    raise ConcurrencyConflictError(
                        f"Gave up after {attempt} conflicting attempts"
                    ) from e
                logfire.warn(
                    "Transaction conflict, retrying", attempt=attempt, error=str(e)
                )
                await asyncio.sleep(self.backoff_seconds * attempt)

    @abstractmethod
    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        """Run ``work`` once, rolling back everything it wrote if it raises."""
        pass
