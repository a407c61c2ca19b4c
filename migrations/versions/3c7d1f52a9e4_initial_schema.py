"""initial_schema

Create the PickMe schema:
- Users (read model plus meetup counter and safety score)
- Pick requests (activity pins with a location and an expiry)
- Matches (a picker's proposal on a pick request)
- Meetups (two-sided start/end confirmation)
- Reviews (one per participant per meetup)

Revision ID: 3c7d1f52a9e4
Revises:
Create Date: 2026-10-16 21:40:12.518204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c7d1f52a9e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _id() -> sa.Column:
    return sa.Column(
        "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
    )


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column(
            "interests",
            postgresql.ARRAY(sa.String(length=50)),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("safety_score", sa.SmallInteger(), server_default="50", nullable=False),
        sa.Column("completed_meetups", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_verified", sa.Boolean(), server_default="false", nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint(
            "safety_score BETWEEN 0 AND 100", name="ck_users_safety_score_range"
        ),
        sa.CheckConstraint("completed_meetups >= 0", name="ck_users_completed_meetups"),
    )

    # ========================================================================
    # PICK_REQUESTS table
    # ========================================================================
    op.create_table(
        "pick_requests",
        _id(),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("activity_type", sa.String(length=20), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("latitude", sa.Double(), nullable=False),
        sa.Column("longitude", sa.Double(), nullable=False),
        sa.Column(
            "status", sa.String(length=20), server_default="active", nullable=False
        ),
        _created_at(),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "activity_type IN ('coffee', 'walk', 'food', 'gaming', 'study', 'movie', 'gym', 'other')",
            name="ck_pick_requests_activity_type",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'matched', 'completed', 'expired', 'cancelled')",
            name="ck_pick_requests_status",
        ),
        sa.CheckConstraint("duration_minutes > 0", name="ck_pick_requests_duration"),
        sa.CheckConstraint(
            "latitude BETWEEN -90 AND 90", name="ck_pick_requests_latitude"
        ),
        sa.CheckConstraint(
            "longitude BETWEEN -180 AND 180", name="ck_pick_requests_longitude"
        ),
    )
    op.create_index("idx_pick_requests_owner", "pick_requests", ["owner_id"])
    op.create_index(
        "idx_pick_requests_status_expires", "pick_requests", ["status", "expires_at"]
    )
    op.create_index(
        "idx_pick_requests_lat_lng",
        "pick_requests",
        ["latitude", "longitude"],
        postgresql_where=sa.text("status = 'active'"),
    )

    # ========================================================================
    # MATCHES table
    # ========================================================================
    op.create_table(
        "matches",
        _id(),
        sa.Column("pick_request_id", sa.UUID(), nullable=False),
        sa.Column("picker_id", sa.UUID(), nullable=False),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column(
            "status", sa.String(length=20), server_default="pending", nullable=False
        ),
        _created_at(),
        sa.Column("approved_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["pick_request_id"], ["pick_requests.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["picker_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "pick_request_id", "picker_id", name="uq_match_request_picker"
        ),
        sa.CheckConstraint(
            "picker_id <> requester_id", name="ck_matches_distinct_users"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined', 'completed')",
            name="ck_matches_status",
        ),
    )
    op.create_index("idx_matches_picker", "matches", ["picker_id"])
    op.create_index("idx_matches_requester", "matches", ["requester_id"])

    # ========================================================================
    # MEETUPS table
    # ========================================================================
    op.create_table(
        "meetups",
        _id(),
        sa.Column("match_id", sa.UUID(), nullable=False),
        sa.Column("picker_id", sa.UUID(), nullable=False),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column(
            "status", sa.String(length=20), server_default="not_started", nullable=False
        ),
        sa.Column(
            "picker_confirmed_start", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column(
            "requester_confirmed_start",
            sa.Boolean(),
            server_default="false",
            nullable=False,
        ),
        sa.Column(
            "picker_confirmed_end", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column(
            "requester_confirmed_end",
            sa.Boolean(),
            server_default="false",
            nullable=False,
        ),
        sa.Column("started_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("ended_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.Column("version", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["picker_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("match_id"),
        sa.CheckConstraint(
            "status IN ('not_started', 'in_progress', 'completed', 'cancelled')",
            name="ck_meetups_status",
        ),
    )

    # ========================================================================
    # REVIEWS table
    # ========================================================================
    op.create_table(
        "reviews",
        _id(),
        sa.Column("meetup_id", sa.UUID(), nullable=False),
        sa.Column("reviewer_id", sa.UUID(), nullable=False),
        sa.Column("reviewed_user_id", sa.UUID(), nullable=False),
        sa.Column("rating", sa.SmallInteger(), nullable=False),
        sa.Column(
            "badges",
            postgresql.ARRAY(sa.String(length=50)),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("would_meet_again", sa.Boolean(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["meetup_id"], ["meetups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reviewer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["reviewed_user_id"], ["users.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "meetup_id", "reviewer_id", name="uq_review_meetup_reviewer"
        ),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
    op.create_index("idx_reviews_reviewed_user", "reviews", ["reviewed_user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("reviews")
    op.drop_table("meetups")
    op.drop_table("matches")
    op.drop_table("pick_requests")
    op.drop_table("users")
