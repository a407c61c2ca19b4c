"""PostgreSQL repository implementations."""

from pickme.persistence.repository.geo_index import PostgresGeoIndex
from pickme.persistence.repository.match import PostgresMatchRepository
from pickme.persistence.repository.meetup import PostgresMeetupRepository
from pickme.persistence.repository.pick_request import PostgresPickRequestRepository
from pickme.persistence.repository.review import PostgresReviewRepository
from pickme.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPickRequestRepository",
    "PostgresMatchRepository",
    "PostgresMeetupRepository",
    "PostgresReviewRepository",
    "PostgresGeoIndex",
]
