"""Unit tests for PickRequestService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from pickme.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from pickme.domain.repository import PickRequestRepository
from pickme.domain.service import MatchService, PickRequestService
from pickme.domain.value import ActivityType, PickStatus, UserId
from tests.factories import pin_pick_request, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreatePickRequest:
    """Tests for PickRequestService.create."""

    @pytest.mark.asyncio
    async def test_create_is_active_with_default_ttl(self, unit_env):
        # Arrange
        owner = await seed_user(unit_env)
        pick_request_repo = await unit_env.get(PickRequestRepository)

        # Act
        pick_request = await pin_pick_request(unit_env, owner)

        # Assert
        assert pick_request.status == PickStatus.ACTIVE
        assert pick_request.owner_id == owner.id
        assert pick_request.expires_at - pick_request.created_at == timedelta(
            minutes=120
        )
        assert await pick_request_repo.find_by_id(pick_request.id) == pick_request

    @pytest.mark.asyncio
    async def test_subject_is_trimmed(self, unit_env):
        owner = await seed_user(unit_env)

        pick_request = await pin_pick_request(unit_env, owner, subject="  Chess  ")

        assert pick_request.subject == "Chess"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", [0, -15])
    async def test_non_positive_duration_rejected(self, unit_env, duration):
        owner = await seed_user(unit_env)

        with pytest.raises(ValidationError):
            await pin_pick_request(unit_env, owner, duration_minutes=duration)

    @pytest.mark.asyncio
    async def test_blank_subject_rejected(self, unit_env):
        owner = await seed_user(unit_env)

        with pytest.raises(ValidationError):
            await pin_pick_request(unit_env, owner, subject="   ")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "latitude, longitude", [(90.5, 0.0), (0.0, -180.5), (float("nan"), 0.0)]
    )
    async def test_bad_coordinates_rejected(self, unit_env, latitude, longitude):
        owner = await seed_user(unit_env)

        with pytest.raises(ValidationError):
            await pin_pick_request(
                unit_env, owner, latitude=latitude, longitude=longitude
            )

    @pytest.mark.asyncio
    async def test_unknown_owner_rejected_and_nothing_saved(self, unit_env):
        pick_request_service = await unit_env.get(PickRequestService)
        ghost = UserId(uuid4())

        with pytest.raises(NotFoundError):
            await pick_request_service.create(
                owner_id=ghost,
                activity_type=ActivityType.WALK,
                subject="Walk",
                duration_minutes=20,
                latitude=1.0,
                longitude=1.0,
            )

        assert await pick_request_service.list_own(ghost) == []


class TestCancelPickRequest:
    """Tests for PickRequestService.cancel."""

    @pytest.mark.asyncio
    async def test_owner_cancels_active(self, unit_env):
        owner = await seed_user(unit_env)
        pick_request = await pin_pick_request(unit_env, owner)
        pick_request_service = await unit_env.get(PickRequestService)

        cancelled = await pick_request_service.cancel(pick_request.id, owner.id)

        assert cancelled.status == PickStatus.CANCELLED
        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_stranger_cannot_cancel(self, unit_env):
        owner = await seed_user(unit_env)
        stranger = await seed_user(unit_env, "Sam")
        pick_request = await pin_pick_request(unit_env, owner)
        pick_request_service = await unit_env.get(PickRequestService)

        with pytest.raises(ForbiddenError):
            await pick_request_service.cancel(pick_request.id, stranger.id)

        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_cannot_cancel_matched(self, unit_env):
        owner = await seed_user(unit_env)
        picker = await seed_user(unit_env, "Pete")
        pick_request = await pin_pick_request(unit_env, owner)
        match_service = await unit_env.get(MatchService)
        pick_request_service = await unit_env.get(PickRequestService)
        await match_service.propose(pick_request.id, picker.id)

        with pytest.raises(InvalidStateError):
            await pick_request_service.cancel(pick_request.id, owner.id)

    @pytest.mark.asyncio
    async def test_cancel_unknown_request(self, unit_env):
        owner = await seed_user(unit_env)
        pick_request_service = await unit_env.get(PickRequestService)

        with pytest.raises(NotFoundError):
            await pick_request_service.cancel(uuid4(), owner.id)


class TestListOwn:
    """Tests for PickRequestService.list_own."""

    @pytest.mark.asyncio
    async def test_lists_every_status_newest_first(self, unit_env):
        owner = await seed_user(unit_env)
        other = await seed_user(unit_env, "Olga")
        pick_request_service = await unit_env.get(PickRequestService)

        first = await pin_pick_request(unit_env, owner, subject="First")
        second = await pin_pick_request(unit_env, owner, subject="Second")
        await pin_pick_request(unit_env, other, subject="Not mine")
        await pick_request_service.cancel(first.id, owner.id)

        own = await pick_request_service.list_own(owner.id)

        assert {p.id for p in own} == {first.id, second.id}
        assert [p.created_at for p in own] == sorted(
            (p.created_at for p in own), reverse=True
        )
        statuses = {p.id: p.status for p in own}
        assert statuses[first.id] == PickStatus.CANCELLED
        assert statuses[second.id] == PickStatus.ACTIVE


class TestExpireSweep:
    """Tests for PickRequestService.expire_sweep."""

    @pytest.mark.asyncio
    async def test_expires_only_stale_active_requests(self, unit_env):
        owner = await seed_user(unit_env)
        picker = await seed_user(unit_env, "Pete")
        pick_request_service = await unit_env.get(PickRequestService)
        match_service = await unit_env.get(MatchService)

        stale = await pin_pick_request(unit_env, owner, subject="Stale")
        matched = await pin_pick_request(unit_env, owner, subject="Matched")
        await match_service.propose(matched.id, picker.id)

        later = stale.expires_at + timedelta(seconds=1)

        # Act
        expired = await pick_request_service.expire_sweep(now=later)

        # Assert
        assert expired == 1
        assert (await pick_request_service.get(stale.id)).status == PickStatus.EXPIRED
        assert (
            await pick_request_service.get(matched.id)
        ).status == PickStatus.MATCHED

    @pytest.mark.asyncio
    async def test_fresh_requests_survive(self, unit_env):
        owner = await seed_user(unit_env)
        pick_request_service = await unit_env.get(PickRequestService)
        fresh = await pin_pick_request(unit_env, owner)

        expired = await pick_request_service.expire_sweep(now=fresh.expires_at)

        assert expired == 0
        assert (await pick_request_service.get(fresh.id)).status == PickStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_sweep_is_idempotent(self, unit_env):
        owner = await seed_user(unit_env)
        pick_request_service = await unit_env.get(PickRequestService)
        stale = await pin_pick_request(unit_env, owner)
        later = stale.expires_at + timedelta(minutes=5)

        assert await pick_request_service.expire_sweep(now=later) == 1
        assert await pick_request_service.expire_sweep(now=later) == 0

    @pytest.mark.asyncio
    async def test_expired_request_cannot_be_picked(self, unit_env):
        owner = await seed_user(unit_env)
        picker = await seed_user(unit_env, "Pete")
        pick_request_service = await unit_env.get(PickRequestService)
        match_service = await unit_env.get(MatchService)
        stale = await pin_pick_request(unit_env, owner)
        await pick_request_service.expire_sweep(
            now=stale.expires_at + timedelta(seconds=1)
        )

        with pytest.raises(InvalidStateError):
            await match_service.propose(stale.id, picker.id)

    @pytest.mark.asyncio
    async def test_failing_row_is_skipped(self, unit_env, monkeypatch):
        # Arrange
        owner = await seed_user(unit_env)
        pick_request_service = await unit_env.get(PickRequestService)
        repo = await unit_env.get(PickRequestRepository)
        first = await pin_pick_request(unit_env, owner, subject="First")
        broken = await pin_pick_request(unit_env, owner, subject="Broken")
        last = await pin_pick_request(unit_env, owner, subject="Last")
        original_update = repo.update

        async def update(pick_request):
            if pick_request.id == broken.id:
                raise RuntimeError("disk on fire")
            return await original_update(pick_request)

        monkeypatch.setattr(repo, "update", update)
        later = last.expires_at + timedelta(seconds=1)

        # Act
        expired = await pick_request_service.expire_sweep(now=later)

        # Assert
        assert expired == 2
        assert (await pick_request_service.get(first.id)).status == PickStatus.EXPIRED
        assert (await pick_request_service.get(last.id)).status == PickStatus.EXPIRED
        assert (await pick_request_service.get(broken.id)).status == PickStatus.ACTIVE
