"""List matches use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.domain.service import MatchService
from pickme.domain.value import UserId

from .common import MatchSummary


class ListMatchesRequest(BaseModel):
    """List matches request."""

    user_id: str  # User ID from authenticated user


class ListMatchesResponse(BaseModel):
    """List matches response, newest first."""

    matches: list[MatchSummary]


class ListMatchesUseCase:
    """Use case for listing matches the caller is part of, on either side."""

    def __init__(self, match_service: MatchService) -> None:
        self.match_service = match_service

    async def execute(self, request: ListMatchesRequest) -> ListMatchesResponse:
        matches = await self.match_service.list_for_user(UserId(UUID(request.user_id)))
        return ListMatchesResponse(
            matches=[MatchSummary.from_domain(match) for match in matches]
        )
