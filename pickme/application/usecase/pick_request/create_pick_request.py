"""Create pick request use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.service import PickRequestService
from pickme.domain.value import ActivityType, UserId

from .common import PickRequestSummary


class CreatePickRequestRequest(BaseModel):
    """Create pick request request."""

    owner_id: str  # User ID from authenticated user
    activity_type: ActivityType
    subject: str
    duration_minutes: int
    latitude: float
    longitude: float


class CreatePickRequestResponse(BaseModel):
    """Create pick request response."""

    pick_request: PickRequestSummary


class CreatePickRequestUseCase(BaseUseCase):
    """Use case for pinning a new pick request on the map."""

    def __init__(self, pick_request_service: PickRequestService) -> None:
        """Initialize create pick request use case.

        Args:
            pick_request_service: Pick request domain service
        """
        self.pick_request_service = pick_request_service

    async def execute(
        self, request: CreatePickRequestRequest
    ) -> CreatePickRequestResponse:
        """Execute create pick request flow.

        Args:
            request: Create pick request request

        Returns:
            The created pick request

        Raises:
            ValidationError: If duration, subject or coordinates are malformed
            NotFoundError: If the owner does not exist
        """
        pick_request = await self.pick_request_service.create(
            owner_id=UserId(UUID(request.owner_id)),
            activity_type=request.activity_type,
            subject=request.subject,
            duration_minutes=request.duration_minutes,
            latitude=request.latitude,
            longitude=request.longitude,
        )
        return CreatePickRequestResponse(
            pick_request=PickRequestSummary.from_domain(pick_request)
        )
