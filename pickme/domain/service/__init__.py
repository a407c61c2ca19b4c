"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .match_service import MatchService
from .meetup_service import MeetupService
from .pick_request_service import PickRequestService
from .proximity_service import NearbyPickRequest, ProximitySearchService
from .review_service import ReviewService
from .safety_policy import (
    SafetyScorePolicy,
    nudge_policy,
    policy_from_name,
    unchanged_policy,
)
from .user_service import UserService

__all__ = [
    "JWTService",
    "MatchService",
    "MeetupService",
    "NearbyPickRequest",
    "PickRequestService",
    "ProximitySearchService",
    "ReviewService",
    "SafetyScorePolicy",
    "Service",
    "UserService",
    "nudge_policy",
    "policy_from_name",
    "unchanged_policy",
]
