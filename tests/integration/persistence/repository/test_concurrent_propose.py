"""Integration test for racing proposals on one pick request."""

import asyncio

import pytest

from pickme.domain.error import InvalidStateError
from pickme.domain.model import Match
from pickme.domain.service import MatchService, PickRequestService
from pickme.domain.value import PickStatus
from tests.di import build_test_container
from tests.factories import pin_pick_request, seed_user


@pytest.mark.asyncio
async def test_racing_proposals_have_one_winner():
    container = build_test_container(unmock={"persistence"})
    try:
        # Arrange - committed before the race starts
        async with container() as env:
            requester = await seed_user(env, "Rita")
            pickers = [await seed_user(env, f"Picker{i}") for i in range(3)]
            pick_request = await pin_pick_request(env, requester)

        async def propose(picker):
            # Each proposal gets its own session, like separate HTTP requests
            async with container() as env:
                match_service = await env.get(MatchService)
                return await match_service.propose(pick_request.id, picker.id)

        # Act
        outcomes = await asyncio.gather(
            *(propose(p) for p in pickers), return_exceptions=True
        )

        # Assert
        winners = [o for o in outcomes if isinstance(o, Match)]
        losers = [o for o in outcomes if not isinstance(o, Match)]
        assert len(winners) == 1
        assert all(isinstance(o, InvalidStateError) for o in losers)
        async with container() as env:
            pick_request_service = await env.get(PickRequestService)
            match_service = await env.get(MatchService)
            stored = await pick_request_service.get(pick_request.id)
            assert stored.status == PickStatus.MATCHED
            assert len(await match_service.list_for_user(requester.id)) == 1
    finally:
        await container.close()
