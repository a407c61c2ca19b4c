"""Domain value objects for PickMe."""

from pickme.domain.value.identifiers import (
    MatchId,
    MeetupId,
    PickRequestId,
    ReviewId,
    UserId,
)
from pickme.domain.value.types import (
    ActivityType,
    GeoPoint,
    MatchStatus,
    MeetupStatus,
    ParticipantRole,
    PickStatus,
    SafetyScore,
)

__all__ = [
    # Identifiers
    "UserId",
    "PickRequestId",
    "MatchId",
    "MeetupId",
    "ReviewId",
    # Types
    "ActivityType",
    "GeoPoint",
    "PickStatus",
    "MatchStatus",
    "MeetupStatus",
    "ParticipantRole",
    "SafetyScore",
]
