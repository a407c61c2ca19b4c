"""Find nearby pick requests use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.model import User
from pickme.domain.service import ProximitySearchService
from pickme.domain.value import UserId

from .common import PickRequestSummary


class OwnerProfile(BaseModel):
    """Public profile of a pick request's owner."""

    user_id: str
    name: str
    age: int | None
    bio: str | None
    interests: list[str]
    safety_score: int
    completed_meetups: int
    is_verified: bool

    @classmethod
    def from_domain(cls, user: User) -> "OwnerProfile":
        return cls(
            user_id=str(user.id),
            name=user.name,
            age=user.age,
            bio=user.bio,
            interests=list(user.interests),
            safety_score=user.safety_score,
            completed_meetups=user.completed_meetups,
            is_verified=user.is_verified,
        )


class NearbyPickRequestItem(BaseModel):
    """One search hit."""

    pick_request: PickRequestSummary
    distance_meters: float
    owner: OwnerProfile


class FindNearbyRequest(BaseModel):
    """Find nearby request."""

    latitude: float
    longitude: float
    radius_meters: float
    user_id: str  # User ID from authenticated user


class FindNearbyResponse(BaseModel):
    """Find nearby response, nearest first."""

    items: list[NearbyPickRequestItem]


class FindNearbyUseCase(BaseUseCase):
    """Use case for browsing other people's active pick requests on the map."""

    def __init__(self, proximity_search_service: ProximitySearchService) -> None:
        """Initialize find nearby use case.

        Args:
            proximity_search_service: Proximity search domain service
        """
        self.proximity_search_service = proximity_search_service

    async def execute(self, request: FindNearbyRequest) -> FindNearbyResponse:
        """Execute nearby search.

        Raises:
            ValidationError: If the centre or radius is malformed
        """
        results = await self.proximity_search_service.find_nearby(
            latitude=request.latitude,
            longitude=request.longitude,
            radius_meters=request.radius_meters,
            excluding_user_id=UserId(UUID(request.user_id)),
        )
        return FindNearbyResponse(
            items=[
                NearbyPickRequestItem(
                    pick_request=PickRequestSummary.from_domain(result.pick_request),
                    distance_meters=result.distance_meters,
                    owner=OwnerProfile.from_domain(result.owner),
                )
                for result in results
            ]
        )
