"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from pickme.domain.model import Match, Meetup, PickRequest, Review, User
from pickme.domain.value import (
    ActivityType,
    GeoPoint,
    MatchId,
    MatchStatus,
    MeetupId,
    MeetupStatus,
    PickRequestId,
    PickStatus,
    ReviewId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row["name"],
        age=row.get("age"),
        bio=row.get("bio"),
        interests=list(row.get("interests") or []),
        safety_score=row["safety_score"],
        completed_meetups=row["completed_meetups"],
        is_verified=row["is_verified"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_pick_request(row: Dict[str, Any]) -> PickRequest:
    """Convert database row to PickRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        PickRequest domain model
    """
    return PickRequest(
        id=PickRequestId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        activity_type=ActivityType(row["activity_type"]),
        subject=row["subject"],
        duration_minutes=row["duration_minutes"],
        location=GeoPoint(latitude=row["latitude"], longitude=row["longitude"]),
        status=PickStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        version=row["version"],
    )


def pick_request_to_dict(pick_request: PickRequest) -> Dict[str, Any]:
    """Convert PickRequest domain model to database dict.

    The location value object is flattened into latitude/longitude columns.

    Args:
        pick_request: PickRequest domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = pick_request.model_dump(exclude={"location"})
    data["activity_type"] = pick_request.activity_type.value
    data["status"] = pick_request.status.value
    data["latitude"] = pick_request.location.latitude
    data["longitude"] = pick_request.location.longitude
    return data


def row_to_match(row: Dict[str, Any]) -> Match:
    """Convert database row to Match domain model."""
    return Match(
        id=MatchId(_uuid(row["id"])),
        pick_request_id=PickRequestId(_uuid(row["pick_request_id"])),
        picker_id=UserId(_uuid(row["picker_id"])),
        requester_id=UserId(_uuid(row["requester_id"])),
        status=MatchStatus(row["status"]),
        created_at=row["created_at"],
        approved_at=row.get("approved_at"),
        version=row["version"],
    )


def match_to_dict(match: Match) -> Dict[str, Any]:
    """Convert Match domain model to database dict."""
    data = match.model_dump()
    data["status"] = match.status.value
    return data


def row_to_meetup(row: Dict[str, Any]) -> Meetup:
    """Convert database row to Meetup domain model."""
    return Meetup(
        id=MeetupId(_uuid(row["id"])),
        match_id=MatchId(_uuid(row["match_id"])),
        picker_id=UserId(_uuid(row["picker_id"])),
        requester_id=UserId(_uuid(row["requester_id"])),
        status=MeetupStatus(row["status"]),
        picker_confirmed_start=row["picker_confirmed_start"],
        requester_confirmed_start=row["requester_confirmed_start"],
        picker_confirmed_end=row["picker_confirmed_end"],
        requester_confirmed_end=row["requester_confirmed_end"],
        started_at=row.get("started_at"),
        ended_at=row.get("ended_at"),
        created_at=row["created_at"],
        version=row["version"],
    )


def meetup_to_dict(meetup: Meetup) -> Dict[str, Any]:
    """Convert Meetup domain model to database dict."""
    data = meetup.model_dump()
    data["status"] = meetup.status.value
    return data


def row_to_review(row: Dict[str, Any]) -> Review:
    """Convert database row to Review domain model."""
    return Review(
        id=ReviewId(_uuid(row["id"])),
        meetup_id=MeetupId(_uuid(row["meetup_id"])),
        reviewer_id=UserId(_uuid(row["reviewer_id"])),
        reviewed_user_id=UserId(_uuid(row["reviewed_user_id"])),
        rating=row["rating"],
        badges=list(row.get("badges") or []),
        would_meet_again=row.get("would_meet_again"),
        comment=row.get("comment"),
        created_at=row["created_at"],
    )


def review_to_dict(review: Review) -> Dict[str, Any]:
    """Convert Review domain model to database dict."""
    return review.model_dump()
