"""Unit tests for GetAverageRatingUseCase."""

from uuid import uuid4

import pytest

from pickme.application.usecase.review import (
    GetAverageRatingRequest,
    GetAverageRatingUseCase,
    SubmitReviewRequest,
    SubmitReviewUseCase,
)
from pickme.domain.error import NotFoundError
from pickme.domain.service import ReviewService, UserService
from tests.factories import completed_meetup, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetAverageRatingUseCase:
    """Tests for GetAverageRatingUseCase."""

    async def _use_case(self, env) -> GetAverageRatingUseCase:
        return GetAverageRatingUseCase(
            review_service=await env.get(ReviewService),
            user_service=await env.get(UserService),
        )

    @pytest.mark.asyncio
    async def test_unreviewed_user(self, unit_env):
        user = await seed_user(unit_env)
        use_case = await self._use_case(unit_env)

        response = await use_case.execute(GetAverageRatingRequest(user_id=str(user.id)))

        assert response.average_rating is None
        assert response.safety_score == 50
        assert response.completed_meetups == 0

    @pytest.mark.asyncio
    async def test_after_a_review(self, unit_env):
        requester, picker, _, _, meetup = await completed_meetup(unit_env)
        submit = SubmitReviewUseCase(review_service=await unit_env.get(ReviewService))
        use_case = await self._use_case(unit_env)

        await submit.execute(
            SubmitReviewRequest(
                meetup_id=str(meetup.id),
                reviewer_id=str(picker.id),
                reviewed_user_id=str(requester.id),
                rating=4,
                badges=["Friendly"],
            )
        )
        response = await use_case.execute(
            GetAverageRatingRequest(user_id=str(requester.id))
        )

        assert response.average_rating == 4.0
        assert response.completed_meetups == 1

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        use_case = await self._use_case(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetAverageRatingRequest(user_id=str(uuid4())))
