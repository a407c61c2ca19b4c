"""Response models shared by meetup use cases."""

from datetime import datetime

from pydantic import BaseModel

from pickme.domain.model import Meetup
from pickme.domain.value import MeetupStatus


class MeetupSummary(BaseModel):
    """Meetup as returned to clients."""

    meetup_id: str
    match_id: str
    picker_id: str
    requester_id: str
    status: MeetupStatus
    picker_confirmed_start: bool
    requester_confirmed_start: bool
    picker_confirmed_end: bool
    requester_confirmed_end: bool
    started_at: datetime | None
    ended_at: datetime | None
    duration_minutes: int | None
    created_at: datetime

    @classmethod
    def from_domain(cls, meetup: Meetup) -> "MeetupSummary":
        return cls(
            meetup_id=str(meetup.id),
            match_id=str(meetup.match_id),
            picker_id=str(meetup.picker_id),
            requester_id=str(meetup.requester_id),
            status=meetup.status,
            picker_confirmed_start=meetup.picker_confirmed_start,
            requester_confirmed_start=meetup.requester_confirmed_start,
            picker_confirmed_end=meetup.picker_confirmed_end,
            requester_confirmed_end=meetup.requester_confirmed_end,
            started_at=meetup.started_at,
            ended_at=meetup.ended_at,
            duration_minutes=meetup.duration_minutes,
            created_at=meetup.created_at,
        )


class MeetupActionRequest(BaseModel):
    """A participant acting on a meetup."""

    meetup_id: str
    caller_id: str  # User ID from authenticated user


class MeetupActionResponse(BaseModel):
    """The meetup after the action."""

    meetup: MeetupSummary
