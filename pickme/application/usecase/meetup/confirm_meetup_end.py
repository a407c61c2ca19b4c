"""Confirm meetup end use case."""

from uuid import UUID

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.service import MeetupService
from pickme.domain.value import MeetupId, UserId

from .common import MeetupActionRequest, MeetupActionResponse, MeetupSummary


class ConfirmMeetupEndUseCase(BaseUseCase):
    """Use case for a participant saying "we're done"."""

    def __init__(self, meetup_service: MeetupService) -> None:
        """Initialize confirm meetup end use case.

        Args:
            meetup_service: Meetup domain service
        """
        self.meetup_service = meetup_service

    async def execute(self, request: MeetupActionRequest) -> MeetupActionResponse:
        """Execute confirm end flow.

        The second confirmation completes the meetup, its match and pick
        request, and credits both users with a completed meetup.

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
            InvalidStateError: If the meetup is not IN_PROGRESS
        """
        meetup = await self.meetup_service.confirm_end(
            MeetupId(UUID(request.meetup_id)), UserId(UUID(request.caller_id))
        )
        return MeetupActionResponse(meetup=MeetupSummary.from_domain(meetup))
