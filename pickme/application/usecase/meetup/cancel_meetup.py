"""Cancel meetup use case."""

from uuid import UUID

from pickme.domain.service import MeetupService
from pickme.domain.value import MeetupId, UserId

from .common import MeetupActionRequest, MeetupActionResponse, MeetupSummary


class CancelMeetupUseCase:
    """Use case for calling off a meetup before it started."""

    def __init__(self, meetup_service: MeetupService) -> None:
        self.meetup_service = meetup_service

    async def execute(self, request: MeetupActionRequest) -> MeetupActionResponse:
        meetup = await self.meetup_service.cancel(
            MeetupId(UUID(request.meetup_id)), UserId(UUID(request.caller_id))
        )
        return MeetupActionResponse(meetup=MeetupSummary.from_domain(meetup))
