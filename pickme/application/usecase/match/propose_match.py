"""Propose match use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.service import MatchService
from pickme.domain.value import PickRequestId, UserId

from .common import MatchSummary


class ProposeMatchRequest(BaseModel):
    """Propose match request."""

    pick_request_id: str
    picker_id: str  # User ID from authenticated user


class ProposeMatchResponse(BaseModel):
    """Propose match response."""

    match: MatchSummary


class ProposeMatchUseCase(BaseUseCase):
    """Use case for a picker offering to join a pick request."""

    def __init__(self, match_service: MatchService) -> None:
        """Initialize propose match use case.

        Args:
            match_service: Match domain service
        """
        self.match_service = match_service

    async def execute(self, request: ProposeMatchRequest) -> ProposeMatchResponse:
        """Execute propose flow.

        Raises:
            NotFoundError: If the pick request does not exist
            InvalidStateError: If the pick request is not ACTIVE
            SelfMatchError: If the picker owns the pick request
            DuplicateProposalError: If the picker already proposed on it
        """
        match = await self.match_service.propose(
            PickRequestId(UUID(request.pick_request_id)),
            UserId(UUID(request.picker_id)),
        )
        return ProposeMatchResponse(match=MatchSummary.from_domain(match))
