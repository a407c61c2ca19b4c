"""Unit tests for the retrying unit-of-work runner."""

from datetime import timedelta
from uuid import uuid4

import pytest

from pickme.domain.error import (
    ConcurrencyConflictError,
    NotFoundError,
    StorageConflictError,
)
from pickme.domain.model import PickRequest
from pickme.domain.value import (
    ActivityType,
    GeoPoint,
    PickRequestId,
    PickStatus,
    UserId,
)
from pickme.persistence.repository.inmemory import (
    InMemoryPickRequestRepository,
    InMemoryTransactionRunner,
    InMemoryUserRepository,
)
from tests.factories import NOW, make_user


def _pick_request() -> PickRequest:
    return PickRequest(
        id=PickRequestId(uuid4()),
        owner_id=UserId(uuid4()),
        activity_type=ActivityType.WALK,
        subject="Loop around the lake",
        duration_minutes=45,
        location=GeoPoint(latitude=52.5, longitude=13.4),
        created_at=NOW,
        expires_at=NOW + timedelta(hours=2),
    )


class TestTransactionRunnerRetry:
    """Tests for retry behaviour."""

    @pytest.mark.asyncio
    async def test_returns_work_result(self):
        runner = InMemoryTransactionRunner([])

        async def work():
            return 42

        assert await runner.run(work) == 42

    @pytest.mark.asyncio
    async def test_retries_storage_conflicts_then_succeeds(self):
        runner = InMemoryTransactionRunner([], max_retries=3)
        attempts = []

        async def work():
            attempts.append(1)
            if len(attempts) < 3:
                raise StorageConflictError("lost version check")
            return "done"

        assert await runner.run(work) == "done"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        runner = InMemoryTransactionRunner([], max_retries=2)
        attempts = []

        async def work():
            attempts.append(1)
            raise StorageConflictError("always loses")

        with pytest.raises(ConcurrencyConflictError):
            await runner.run(work)

        # First attempt plus two retries
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self):
        runner = InMemoryTransactionRunner([], max_retries=3)
        attempts = []

        async def work():
            attempts.append(1)
            raise NotFoundError("PickRequest", "nope")

        with pytest.raises(NotFoundError):
            await runner.run(work)

        assert len(attempts) == 1


class TestInMemoryRollback:
    """Failed work must leave the stores as they were."""

    @pytest.mark.asyncio
    async def test_writes_rolled_back_on_error(self):
        users = InMemoryUserRepository()
        pick_requests = InMemoryPickRequestRepository()
        runner = InMemoryTransactionRunner([users, pick_requests])
        pick_request = _pick_request()

        async def work():
            await users.save(make_user())
            await pick_requests.save(pick_request)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await runner.run(work)

        assert await pick_requests.find_by_id(pick_request.id) is None
        assert await pick_requests.find_all() == []

    @pytest.mark.asyncio
    async def test_retry_starts_from_clean_state(self):
        pick_requests = InMemoryPickRequestRepository()
        pick_request = await pick_requests.save(_pick_request())
        runner = InMemoryTransactionRunner([pick_requests], max_retries=1)
        attempts = []

        async def work():
            attempts.append(1)
            stored = await pick_requests.find_by_id(pick_request.id)
            updated = await pick_requests.update(stored.transition(PickStatus.MATCHED))
            if len(attempts) == 1:
                raise StorageConflictError("simulated")
            return updated

        result = await runner.run(work)

        # The first attempt's write was undone, so only one version bump sticks
        assert result.version == 1
        assert result.status == PickStatus.MATCHED

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(self):
        pick_requests = InMemoryPickRequestRepository()
        original = await pick_requests.save(_pick_request())
        await pick_requests.update(original.transition(PickStatus.MATCHED))

        with pytest.raises(StorageConflictError):
            await pick_requests.update(original.transition(PickStatus.CANCELLED))
