"""List own pick requests use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.domain.service import PickRequestService
from pickme.domain.value import UserId

from .common import PickRequestSummary


class ListOwnPickRequestsRequest(BaseModel):
    """List own pick requests request."""

    owner_id: str  # User ID from authenticated user


class ListOwnPickRequestsResponse(BaseModel):
    """List own pick requests response."""

    pick_requests: list[PickRequestSummary]


class ListOwnPickRequestsUseCase:
    """Use case for listing the caller's pick requests, newest first."""

    def __init__(self, pick_request_service: PickRequestService) -> None:
        """Initialize list own pick requests use case.

        Args:
            pick_request_service: Pick request domain service
        """
        self.pick_request_service = pick_request_service

    async def execute(
        self, request: ListOwnPickRequestsRequest
    ) -> ListOwnPickRequestsResponse:
        pick_requests = await self.pick_request_service.list_own(
            UserId(UUID(request.owner_id))
        )
        return ListOwnPickRequestsResponse(
            pick_requests=[PickRequestSummary.from_domain(p) for p in pick_requests]
        )
