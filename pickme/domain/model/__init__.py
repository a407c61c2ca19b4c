"""Domain model entities for PickMe."""

from pickme.domain.model.match import Match
from pickme.domain.model.meetup import Meetup
from pickme.domain.model.pick_request import PickRequest
from pickme.domain.model.review import Review
from pickme.domain.model.user import User

__all__ = [
    "User",
    "PickRequest",
    "Match",
    "Meetup",
    "Review",
]
