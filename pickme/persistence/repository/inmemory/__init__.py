"""In-memory repository implementations for testing."""

from .base import InMemoryStore
from .geo_index import InMemoryGeoIndex
from .match import InMemoryMatchRepository
from .meetup import InMemoryMeetupRepository
from .pick_request import InMemoryPickRequestRepository
from .review import InMemoryReviewRepository
from .transaction import InMemoryTransactionRunner
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryGeoIndex",
    "InMemoryMatchRepository",
    "InMemoryMeetupRepository",
    "InMemoryPickRequestRepository",
    "InMemoryReviewRepository",
    "InMemoryStore",
    "InMemoryTransactionRunner",
    "InMemoryUserRepository",
]
