"""Integration tests for the unique constraints behind duplicate detection."""

import pytest

from pickme.domain.error import DuplicateProposalError, DuplicateReviewError
from pickme.domain.service import MatchService, ReviewService
from tests.factories import completed_meetup, pin_pick_request, seed_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestUniqueConstraints:
    """The database rejects the second write and the session stays usable."""

    @pytest.mark.asyncio
    async def test_second_proposal_is_duplicate(self, integration_env):
        # Arrange
        requester = await seed_user(integration_env, "Rita")
        picker = await seed_user(integration_env, "Pete")
        pick_request = await pin_pick_request(integration_env, requester)
        match_service = await integration_env.get(MatchService)
        first = await match_service.propose(pick_request.id, picker.id)

        # Act / Assert
        with pytest.raises(DuplicateProposalError):
            await match_service.propose(pick_request.id, picker.id)

        matches = await match_service.list_for_user(picker.id)
        assert [m.id for m in matches] == [first.id]

    @pytest.mark.asyncio
    async def test_second_review_is_duplicate(self, integration_env):
        # Arrange
        requester, picker, _, _, meetup = await completed_meetup(integration_env)
        review_service = await integration_env.get(ReviewService)
        await review_service.submit(meetup.id, picker.id, requester.id, 4)

        # Act / Assert
        with pytest.raises(DuplicateReviewError):
            await review_service.submit(meetup.id, picker.id, requester.id, 2)

        assert await review_service.average_rating(requester.id) == 4.0
