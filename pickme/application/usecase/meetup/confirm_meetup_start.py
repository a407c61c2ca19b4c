"""Confirm meetup start use case."""

from uuid import UUID

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.service import MeetupService
from pickme.domain.value import MeetupId, UserId

from .common import MeetupActionRequest, MeetupActionResponse, MeetupSummary


class ConfirmMeetupStartUseCase(BaseUseCase):
    """Use case for a participant saying "we've met"."""

    def __init__(self, meetup_service: MeetupService) -> None:
        """Initialize confirm meetup start use case.

        Args:
            meetup_service: Meetup domain service
        """
        self.meetup_service = meetup_service

    async def execute(self, request: MeetupActionRequest) -> MeetupActionResponse:
        """Execute confirm start flow.

        The meetup only moves to IN_PROGRESS once both participants confirmed.

        Raises:
            NotFoundError: If the meetup does not exist
            ForbiddenError: If the caller is not a participant
            InvalidStateError: If the meetup is not NOT_STARTED
        """
        meetup = await self.meetup_service.confirm_start(
            MeetupId(UUID(request.meetup_id)), UserId(UUID(request.caller_id))
        )
        return MeetupActionResponse(meetup=MeetupSummary.from_domain(meetup))
