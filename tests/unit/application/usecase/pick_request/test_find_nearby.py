"""Unit tests for FindNearbyUseCase."""

import pytest

from pickme.application.usecase.pick_request import FindNearbyRequest, FindNearbyUseCase
from pickme.domain.service import ProximitySearchService
from pickme.domain.value import ActivityType
from tests.factories import pin_pick_request, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestFindNearbyUseCase:
    """Tests for FindNearbyUseCase."""

    @pytest.mark.asyncio
    async def test_items_carry_owner_profile_and_label(self, unit_env):
        # Arrange
        searcher = await seed_user(unit_env, "Sara")
        owner = await seed_user(
            unit_env, "Nico", is_verified=True, interests=["chess"], age=31
        )
        await pin_pick_request(
            unit_env,
            owner,
            activity_type=ActivityType.STUDY,
            subject="Exam prep",
            latitude=52.5200,
            longitude=13.4050,
        )
        use_case = FindNearbyUseCase(
            proximity_search_service=await unit_env.get(ProximitySearchService)
        )

        # Act
        response = await use_case.execute(
            FindNearbyRequest(
                latitude=52.5201,
                longitude=13.4051,
                radius_meters=500,
                user_id=str(searcher.id),
            )
        )

        # Assert
        assert len(response.items) == 1
        item = response.items[0]
        assert item.pick_request.subject == "Exam prep"
        assert item.pick_request.activity_label == ActivityType.STUDY.display_name
        assert item.owner.name == "Nico"
        assert item.owner.is_verified
        assert item.owner.interests == ["chess"]
        assert item.owner.age == 31
        assert item.distance_meters < 50
