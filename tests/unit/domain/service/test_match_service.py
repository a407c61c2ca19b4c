"""Unit tests for MatchService."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from pickme.domain.error import (
    DuplicateProposalError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SelfMatchError,
)
from pickme.domain.model import Match, Meetup
from pickme.domain.repository import MatchRepository, MeetupRepository
from pickme.domain.service import (
    MatchService,
    MeetupService,
    PickRequestService,
    ProximitySearchService,
)
from pickme.domain.value import MatchStatus, MeetupId, MeetupStatus, PickStatus, UserId
from tests.factories import pin_pick_request, seed_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestProposeMatch:
    """Tests for MatchService.propose."""

    @pytest.mark.asyncio
    async def test_propose_creates_pending_match_and_marks_request(self, unit_env):
        # Arrange
        requester = await seed_user(unit_env, "Rita")
        picker = await seed_user(unit_env, "Pete")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        pick_request_service = await unit_env.get(PickRequestService)

        # Act
        match = await match_service.propose(pick_request.id, picker.id)

        # Assert
        assert match.status == MatchStatus.PENDING
        assert match.picker_id == picker.id
        assert match.requester_id == requester.id
        assert match.approved_at is None
        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.MATCHED

    @pytest.mark.asyncio
    async def test_cannot_pick_own_request(self, unit_env):
        requester = await seed_user(unit_env, "Rita")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        pick_request_service = await unit_env.get(PickRequestService)

        with pytest.raises(SelfMatchError):
            await match_service.propose(pick_request.id, requester.id)

        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.ACTIVE
        assert await match_service.list_for_user(requester.id) == []

    @pytest.mark.asyncio
    async def test_second_picker_sees_request_taken(self, unit_env):
        requester = await seed_user(unit_env, "Rita")
        first = await seed_user(unit_env, "Pete")
        second = await seed_user(unit_env, "Quinn")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)

        await match_service.propose(pick_request.id, first.id)

        with pytest.raises(InvalidStateError):
            await match_service.propose(pick_request.id, second.id)

    @pytest.mark.asyncio
    async def test_same_picker_cannot_propose_twice(self, unit_env):
        """After a decline the request is back on the map, but not for the same picker."""
        requester = await seed_user(unit_env, "Rita")
        picker = await seed_user(unit_env, "Pete")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)

        match = await match_service.propose(pick_request.id, picker.id)
        await match_service.respond(match.id, False, requester.id)

        with pytest.raises(DuplicateProposalError):
            await match_service.propose(pick_request.id, picker.id)

    @pytest.mark.asyncio
    async def test_unknown_request(self, unit_env):
        picker = await seed_user(unit_env, "Pete")
        match_service = await unit_env.get(MatchService)

        with pytest.raises(NotFoundError):
            await match_service.propose(uuid4(), picker.id)

    @pytest.mark.asyncio
    async def test_unknown_picker(self, unit_env):
        # Arrange
        requester = await seed_user(unit_env, "Rita")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        pick_request_service = await unit_env.get(PickRequestService)

        # Act / Assert
        with pytest.raises(NotFoundError):
            await match_service.propose(pick_request.id, UserId(uuid4()))

        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.ACTIVE
        assert await match_service.list_for_user(requester.id) == []

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_is_duplicate(self, unit_env, monkeypatch):
        """A proposal that slips past the lookup still trips the unique constraint."""
        requester = await seed_user(unit_env, "Rita")
        picker = await seed_user(unit_env, "Pete")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        match_repo = await unit_env.get(MatchRepository)
        match = await match_service.propose(pick_request.id, picker.id)
        await match_service.respond(match.id, False, requester.id)

        async def lookup_misses(*args):
            return None

        async def unique_violation(match):
            raise IntegrityError(
                "INSERT INTO matches",
                None,
                Exception(
                    "duplicate key value violates unique constraint "
                    '"uq_match_request_picker"'
                ),
            )

        monkeypatch.setattr(match_repo, "find_by_request_and_picker", lookup_misses)
        monkeypatch.setattr(match_repo, "save", unique_violation)

        with pytest.raises(DuplicateProposalError):
            await match_service.propose(pick_request.id, picker.id)

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, unit_env, monkeypatch):
        requester = await seed_user(unit_env, "Rita")
        picker = await seed_user(unit_env, "Pete")
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        match_repo = await unit_env.get(MatchRepository)
        pick_request_service = await unit_env.get(PickRequestService)

        async def foreign_key_violation(match):
            raise IntegrityError(
                "INSERT INTO matches",
                None,
                Exception(
                    'insert or update on table "matches" violates foreign key '
                    'constraint "matches_picker_id_fkey"'
                ),
            )

        monkeypatch.setattr(match_repo, "save", foreign_key_violation)

        with pytest.raises(IntegrityError):
            await match_service.propose(pick_request.id, picker.id)

        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_concurrent_proposals_have_one_winner(self, unit_env):
        # Arrange
        requester = await seed_user(unit_env, "Rita")
        pickers = [await seed_user(unit_env, f"Picker{i}") for i in range(5)]
        pick_request = await pin_pick_request(unit_env, requester)
        match_service = await unit_env.get(MatchService)
        pick_request_service = await unit_env.get(PickRequestService)

        # Act
        outcomes = await asyncio.gather(
            *(match_service.propose(pick_request.id, p.id) for p in pickers),
            return_exceptions=True,
        )

        # Assert
        winners = [o for o in outcomes if isinstance(o, Match)]
        losers = [o for o in outcomes if not isinstance(o, Match)]
        assert len(winners) == 1
        assert all(isinstance(o, InvalidStateError) for o in losers)
        assert len(await match_service.list_for_user(requester.id)) == 1
        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.MATCHED


class TestRespondToMatch:
    """Tests for MatchService.respond."""

    async def _proposed(self, env):
        requester = await seed_user(env, "Rita")
        picker = await seed_user(env, "Pete")
        pick_request = await pin_pick_request(env, requester)
        match_service = await env.get(MatchService)
        match = await match_service.propose(pick_request.id, picker.id)
        return requester, picker, pick_request, match

    @pytest.mark.asyncio
    async def test_approve_accepts_and_creates_meetup(self, unit_env):
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)
        meetup_service = await unit_env.get(MeetupService)
        pick_request_service = await unit_env.get(PickRequestService)

        accepted = await match_service.respond(match.id, True, requester.id)

        assert accepted.status == MatchStatus.ACCEPTED
        assert accepted.approved_at is not None
        meetup = await meetup_service.get_by_match(match.id, picker.id)
        assert meetup.status == MeetupStatus.NOT_STARTED
        assert meetup.picker_id == picker.id
        assert meetup.requester_id == requester.id
        # Request stays MATCHED until the meetup completes
        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.MATCHED

    @pytest.mark.asyncio
    async def test_decline_puts_request_back_on_the_map(self, unit_env):
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)
        meetup_service = await unit_env.get(MeetupService)
        pick_request_service = await unit_env.get(PickRequestService)

        declined = await match_service.respond(match.id, False, requester.id)

        assert declined.status == MatchStatus.DECLINED
        assert declined.approved_at is None
        stored = await pick_request_service.get(pick_request.id)
        assert stored.status == PickStatus.ACTIVE
        with pytest.raises(NotFoundError):
            await meetup_service.get_by_match(match.id, requester.id)

    @pytest.mark.asyncio
    async def test_declined_request_is_found_nearby_again(self, unit_env):
        # Arrange
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)
        proximity = await unit_env.get(ProximitySearchService)
        centre = (pick_request.location.latitude, pick_request.location.longitude)
        assert await proximity.find_nearby(*centre, 500, picker.id) == []

        # Act
        await match_service.respond(match.id, False, requester.id)

        # Assert
        results = await proximity.find_nearby(*centre, 500, picker.id)
        assert [r.pick_request.id for r in results] == [pick_request.id]

    @pytest.mark.asyncio
    async def test_only_requester_may_respond(self, unit_env):
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)

        with pytest.raises(ForbiddenError):
            await match_service.respond(match.id, True, picker.id)

        assert (await match_service.get(match.id)).status == MatchStatus.PENDING

    @pytest.mark.asyncio
    async def test_outsider_may_not_respond(self, unit_env):
        requester, picker, pick_request, match = await self._proposed(unit_env)
        outsider = await seed_user(unit_env, "Olga")
        match_service = await unit_env.get(MatchService)

        with pytest.raises(ForbiddenError):
            await match_service.respond(match.id, False, outsider.id)

        assert (await match_service.get(match.id)).status == MatchStatus.PENDING

    @pytest.mark.asyncio
    async def test_cannot_respond_twice(self, unit_env):
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)
        await match_service.respond(match.id, True, requester.id)

        with pytest.raises(InvalidStateError):
            await match_service.respond(match.id, False, requester.id)

    @pytest.mark.asyncio
    async def test_approve_is_all_or_nothing(self, unit_env):
        """If the meetup cannot be created the match stays PENDING."""
        requester, picker, pick_request, match = await self._proposed(unit_env)
        match_service = await unit_env.get(MatchService)
        meetup_repo = await unit_env.get(MeetupRepository)

        # A meetup already bound to the match makes the insert fail
        await meetup_repo.save(
            Meetup(
                id=MeetupId(uuid4()),
                match_id=match.id,
                picker_id=picker.id,
                requester_id=requester.id,
            )
        )

        with pytest.raises(IntegrityError):
            await match_service.respond(match.id, True, requester.id)

        stored = await match_service.get(match.id)
        assert stored.status == MatchStatus.PENDING
        assert stored.approved_at is None

    @pytest.mark.asyncio
    async def test_unknown_match(self, unit_env):
        requester = await seed_user(unit_env, "Rita")
        match_service = await unit_env.get(MatchService)

        with pytest.raises(NotFoundError):
            await match_service.respond(uuid4(), True, requester.id)


class TestListMatches:
    """Tests for MatchService.list_for_user."""

    @pytest.mark.asyncio
    async def test_lists_both_sides(self, unit_env):
        alice = await seed_user(unit_env, "Alice")
        bob = await seed_user(unit_env, "Bob")
        carol = await seed_user(unit_env, "Carol")
        match_service = await unit_env.get(MatchService)

        alices_request = await pin_pick_request(unit_env, alice)
        carols_request = await pin_pick_request(unit_env, carol)
        as_requester = await match_service.propose(alices_request.id, bob.id)
        as_picker = await match_service.propose(carols_request.id, alice.id)

        alice_matches = await match_service.list_for_user(alice.id)
        bob_matches = await match_service.list_for_user(bob.id)

        assert {m.id for m in alice_matches} == {as_requester.id, as_picker.id}
        assert [m.id for m in bob_matches] == [as_requester.id]
