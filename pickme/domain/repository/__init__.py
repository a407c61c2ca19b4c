"""Repository interfaces for the PickMe domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from pickme.domain.repository.geo_index import GeoIndex
from pickme.domain.repository.match import MatchRepository
from pickme.domain.repository.meetup import MeetupRepository
from pickme.domain.repository.pick_request import PickRequestRepository
from pickme.domain.repository.review import ReviewRepository
from pickme.domain.repository.transaction import TransactionRunner
from pickme.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PickRequestRepository",
    "MatchRepository",
    "MeetupRepository",
    "ReviewRepository",
    "GeoIndex",
    "TransactionRunner",
]
