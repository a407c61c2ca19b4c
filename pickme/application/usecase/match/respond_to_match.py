"""Respond to match use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.domain.service import MatchService, MeetupService
from pickme.domain.value import MatchId, UserId

from .common import MatchSummary


class RespondToMatchRequest(BaseModel):
    """Respond to match request."""

    match_id: str
    approve: bool
    caller_id: str  # User ID from authenticated user


class RespondToMatchResponse(BaseModel):
    """Respond to match response.

    ``meetup_id`` is set when the match was approved.
    """

    match: MatchSummary
    meetup_id: str | None = None


class RespondToMatchUseCase:
    """Use case for the requester approving or declining a proposal."""

    def __init__(self, match_service: MatchService, meetup_service: MeetupService) -> None:
        """Initialize respond to match use case.

        Args:
            match_service: Match domain service
            meetup_service: Meetup domain service
        """
        self.match_service = match_service
        self.meetup_service = meetup_service

    async def execute(self, request: RespondToMatchRequest) -> RespondToMatchResponse:
        """Execute respond flow.

        Raises:
            NotFoundError: If the match does not exist
            ForbiddenError: If the caller is not the requester
            InvalidStateError: If the match is not PENDING
        """
        caller_id = UserId(UUID(request.caller_id))
        match = await self.match_service.respond(
            MatchId(UUID(request.match_id)), request.approve, caller_id
        )

        meetup_id = None
        if match.is_accepted:
            meetup = await self.meetup_service.get_by_match(match.id, caller_id)
            meetup_id = str(meetup.id)

        return RespondToMatchResponse(
            match=MatchSummary.from_domain(match), meetup_id=meetup_id
        )
