"""Meetup use cases."""

from .cancel_meetup import CancelMeetupUseCase
from .common import MeetupActionRequest, MeetupActionResponse, MeetupSummary
from .confirm_meetup_end import ConfirmMeetupEndUseCase
from .confirm_meetup_start import ConfirmMeetupStartUseCase
from .get_meetup import GetMeetupUseCase

__all__ = [
    "CancelMeetupUseCase",
    "ConfirmMeetupEndUseCase",
    "ConfirmMeetupStartUseCase",
    "GetMeetupUseCase",
    "MeetupActionRequest",
    "MeetupActionResponse",
    "MeetupSummary",
]
