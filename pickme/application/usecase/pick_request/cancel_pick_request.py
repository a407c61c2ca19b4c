"""Cancel pick request use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.domain.service import PickRequestService
from pickme.domain.value import PickRequestId, UserId

from .common import PickRequestSummary


class CancelPickRequestRequest(BaseModel):
    """Cancel pick request request."""

    pick_request_id: str
    caller_id: str  # User ID from authenticated user


class CancelPickRequestResponse(BaseModel):
    """Cancel pick request response."""

    pick_request: PickRequestSummary


class CancelPickRequestUseCase:
    """Use case for withdrawing an active pick request."""

    def __init__(self, pick_request_service: PickRequestService) -> None:
        """Initialize cancel pick request use case.

        Args:
            pick_request_service: Pick request domain service
        """
        self.pick_request_service = pick_request_service

    async def execute(
        self, request: CancelPickRequestRequest
    ) -> CancelPickRequestResponse:
        """Execute cancel pick request flow.

        Raises:
            NotFoundError: If the pick request does not exist
            ForbiddenError: If the caller is not the owner
            InvalidStateError: If the pick request is not ACTIVE
        """
        pick_request = await self.pick_request_service.cancel(
            PickRequestId(UUID(request.pick_request_id)),
            UserId(UUID(request.caller_id)),
        )
        return CancelPickRequestResponse(
            pick_request=PickRequestSummary.from_domain(pick_request)
        )
