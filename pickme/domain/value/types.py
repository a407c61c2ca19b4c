"""Domain value objects for PickMe.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.

Each lifecycle status is a closed enum with an explicit transition table,
so an entity can only move along the edges listed here.
"""

from enum import Enum

from pydantic import Field

from pickme.domain.value.common import ValueObject


class ActivityType(str, Enum):
    """What the requester wants company for."""

    COFFEE = "coffee"
    WALK = "walk"
    FOOD = "food"
    GAMING = "gaming"
    STUDY = "study"
    MOVIE = "movie"
    GYM = "gym"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Human-readable label shown on the map."""
        return _ACTIVITY_DISPLAY_NAMES[self]


_ACTIVITY_DISPLAY_NAMES = {
    ActivityType.COFFEE: "☕ Coffee",
    ActivityType.WALK: "🚶 Walk",
    ActivityType.FOOD: "🍔 Food",
    ActivityType.GAMING: "🎮 Gaming",
    ActivityType.STUDY: "📚 Study",
    ActivityType.MOVIE: "🎬 Movie",
    ActivityType.GYM: "💪 Gym",
    ActivityType.OTHER: "🤝 Other",
}


class PickStatus(str, Enum):
    """Status of a pick request."""

    ACTIVE = "active"  # Visible on the map, waiting to be picked
    MATCHED = "matched"  # A picker proposed, awaiting or past approval
    COMPLETED = "completed"  # Meetup finished
    EXPIRED = "expired"  # TTL passed while still active
    CANCELLED = "cancelled"  # Owner withdrew it

    def can_transition_to(self, target: "PickStatus") -> bool:
        """Check whether ``self -> target`` is an allowed transition."""
        return target in _PICK_TRANSITIONS[self]


_PICK_TRANSITIONS: dict[PickStatus, frozenset[PickStatus]] = {
    PickStatus.ACTIVE: frozenset(
        {PickStatus.MATCHED, PickStatus.EXPIRED, PickStatus.CANCELLED}
    ),
    PickStatus.MATCHED: frozenset({PickStatus.ACTIVE, PickStatus.COMPLETED}),
    PickStatus.COMPLETED: frozenset(),
    PickStatus.EXPIRED: frozenset(),
    PickStatus.CANCELLED: frozenset(),
}


class MatchStatus(str, Enum):
    """Status of a match proposal."""

    PENDING = "pending"  # Picker proposed, waiting for requester approval
    ACCEPTED = "accepted"  # Requester approved
    DECLINED = "declined"  # Requester said no
    COMPLETED = "completed"  # Meetup finished

    def can_transition_to(self, target: "MatchStatus") -> bool:
        """Check whether ``self -> target`` is an allowed transition."""
        return target in _MATCH_TRANSITIONS[self]


_MATCH_TRANSITIONS: dict[MatchStatus, frozenset[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACCEPTED, MatchStatus.DECLINED}),
    MatchStatus.ACCEPTED: frozenset({MatchStatus.COMPLETED}),
    MatchStatus.DECLINED: frozenset(),
    MatchStatus.COMPLETED: frozenset(),
}


class MeetupStatus(str, Enum):
    """Status of a physical meetup."""

    NOT_STARTED = "not_started"  # Match accepted, nobody met yet
    IN_PROGRESS = "in_progress"  # Both confirmed the start
    COMPLETED = "completed"  # Both confirmed the end
    CANCELLED = "cancelled"  # Called off before it started

    def can_transition_to(self, target: "MeetupStatus") -> bool:
        """Check whether ``self -> target`` is an allowed transition."""
        return target in _MEETUP_TRANSITIONS[self]


_MEETUP_TRANSITIONS: dict[MeetupStatus, frozenset[MeetupStatus]] = {
    MeetupStatus.NOT_STARTED: frozenset(
        {MeetupStatus.IN_PROGRESS, MeetupStatus.CANCELLED}
    ),
    MeetupStatus.IN_PROGRESS: frozenset({MeetupStatus.COMPLETED}),
    MeetupStatus.COMPLETED: frozenset(),
    MeetupStatus.CANCELLED: frozenset(),
}


class ParticipantRole(str, Enum):
    """Which side of a match a user is on."""

    PICKER = "picker"
    REQUESTER = "requester"


class SafetyScore:
    """Bounds for a user's safety score."""

    MIN = 0
    MAX = 100
    DEFAULT = 50

    @classmethod
    def clamp(cls, value: int) -> int:
        return max(cls.MIN, min(cls.MAX, value))


class GeoPoint(ValueObject):
    """A latitude/longitude pair in decimal degrees (WGS84)."""

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
