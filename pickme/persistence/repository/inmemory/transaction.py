"""In-memory transaction runner for testing."""

from typing import Awaitable, Callable, Sequence, TypeVar

from pickme.domain.repository.transaction import TransactionRunner

from .base import InMemoryStore

T = TypeVar("T")


class InMemoryTransactionRunner(TransactionRunner):
    """Snapshots the given repositories and restores them if the work fails.

    Nested runs take their own snapshot, so an inner failure only undoes the
    inner writes, matching SAVEPOINT behaviour.
    """

    def __init__(
        self,
        repositories: Sequence[InMemoryStore],
        max_retries: int = 3,
        backoff_seconds: float = 0.0,
    ) -> None:
        super().__init__(max_retries=max_retries, backoff_seconds=backoff_seconds)
        self.repositories = list(repositories)

    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        snapshots = [repo.snapshot() for repo in self.repositories]
        try:
            return await work()
        except BaseException:
            for repo, snapshot in zip(self.repositories, snapshots):
                repo.restore(snapshot)
            raise
