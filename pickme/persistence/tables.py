"""SQLAlchemy table definitions for PickMe.

Core tables only; rows are mapped to the pydantic domain models by hand in
``mappers.py``. Status columns are plain strings guarded by CHECK
constraints so the domain enums stay the single source of truth.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Double,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

from pickme.domain.repository.constraint import (
    MATCH_REQUEST_PICKER_UNIQUE,
    REVIEW_MEETUP_REVIEWER_UNIQUE,
)
from pickme.domain.value import (
    ActivityType,
    MatchStatus,
    MeetupStatus,
    PickStatus,
)

# Metadata object for all tables
metadata = MetaData()


def _one_of(column: str, values: list[str]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


# ============================================================================
# USERS TABLE (owned by the account service, read and counters only)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(100), nullable=False),
    Column("age", Integer, nullable=True),
    Column("bio", Text, nullable=True),
    Column("interests", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("safety_score", SmallInteger, nullable=False, server_default="50"),
    Column("completed_meetups", Integer, nullable=False, server_default="0"),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    CheckConstraint(
        "safety_score BETWEEN 0 AND 100", name="ck_users_safety_score_range"
    ),
    CheckConstraint("completed_meetups >= 0", name="ck_users_completed_meetups"),
)

# ============================================================================
# PICK REQUESTS TABLE
# ============================================================================
pick_requests_table = Table(
    "pick_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("owner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("activity_type", String(20), nullable=False),
    Column("subject", String(200), nullable=False),
    Column("duration_minutes", Integer, nullable=False),
    Column("latitude", Double, nullable=False),
    Column("longitude", Double, nullable=False),
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("version", Integer, nullable=False, server_default="0"),
    CheckConstraint(
        _one_of("activity_type", [a.value for a in ActivityType]),
        name="ck_pick_requests_activity_type",
    ),
    CheckConstraint(
        _one_of("status", [s.value for s in PickStatus]),
        name="ck_pick_requests_status",
    ),
    CheckConstraint("duration_minutes > 0", name="ck_pick_requests_duration"),
    CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_pick_requests_latitude"),
    CheckConstraint(
        "longitude BETWEEN -180 AND 180", name="ck_pick_requests_longitude"
    ),
)

Index("idx_pick_requests_owner", pick_requests_table.c.owner_id)
# Expiry sweep scans ACTIVE rows by expires_at
Index(
    "idx_pick_requests_status_expires",
    pick_requests_table.c.status,
    pick_requests_table.c.expires_at,
)
# Bounding-box prefilter for proximity search
Index(
    "idx_pick_requests_lat_lng",
    pick_requests_table.c.latitude,
    pick_requests_table.c.longitude,
    postgresql_where=pick_requests_table.c.status == PickStatus.ACTIVE.value,
)

# ============================================================================
# MATCHES TABLE
# ============================================================================
matches_table = Table(
    "matches",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "pick_request_id",
        UUID,
        ForeignKey("pick_requests.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "picker_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "requester_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column("approved_at", TIMESTAMP(timezone=True), nullable=True),
    Column("version", Integer, nullable=False, server_default="0"),
    UniqueConstraint(
        "pick_request_id", "picker_id", name=MATCH_REQUEST_PICKER_UNIQUE
    ),
    CheckConstraint("picker_id <> requester_id", name="ck_matches_distinct_users"),
    CheckConstraint(
        _one_of("status", [s.value for s in MatchStatus]), name="ck_matches_status"
    ),
)

Index("idx_matches_picker", matches_table.c.picker_id)
Index("idx_matches_requester", matches_table.c.requester_id)

# ============================================================================
# MEETUPS TABLE
# ============================================================================
meetups_table = Table(
    "meetups",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "match_id",
        UUID,
        ForeignKey("matches.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column(
        "picker_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "requester_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("status", String(20), nullable=False, server_default="not_started"),
    Column("picker_confirmed_start", Boolean, nullable=False, server_default="false"),
    Column(
        "requester_confirmed_start", Boolean, nullable=False, server_default="false"
    ),
    Column("picker_confirmed_end", Boolean, nullable=False, server_default="false"),
    Column("requester_confirmed_end", Boolean, nullable=False, server_default="false"),
    Column("started_at", TIMESTAMP(timezone=True), nullable=True),
    Column("ended_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    Column("version", Integer, nullable=False, server_default="0"),
    CheckConstraint(
        _one_of("status", [s.value for s in MeetupStatus]), name="ck_meetups_status"
    ),
)

# ============================================================================
# REVIEWS TABLE
# ============================================================================
reviews_table = Table(
    "reviews",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "meetup_id", UUID, ForeignKey("meetups.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "reviewer_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "reviewed_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("rating", SmallInteger, nullable=False),
    Column("badges", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("would_meet_again", Boolean, nullable=True),
    Column("comment", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("meetup_id", "reviewer_id", name=REVIEW_MEETUP_REVIEWER_UNIQUE),
    CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
)

Index("idx_reviews_reviewed_user", reviews_table.c.reviewed_user_id)
