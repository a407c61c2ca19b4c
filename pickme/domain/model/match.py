"""Match entity.

A match is a picker's proposal onto someone else's pick request, and the
requester's answer to it. Matches are never deleted.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from pickme.domain.error import InvalidStateError
from pickme.domain.model.common import DomainModel
from pickme.domain.value import (
    MatchId,
    MatchStatus,
    ParticipantRole,
    PickRequestId,
    UserId,
)


class Match(DomainModel):
    """Match entity.

    Business rules:
    - One match per (pick request, picker), enforced by a unique constraint
    - Picker and requester are different users
    - PENDING -> ACCEPTED | DECLINED exactly once, by the requester
    - ACCEPTED -> COMPLETED when the meetup ends
    """

    id: MatchId
    pick_request_id: PickRequestId
    picker_id: UserId
    requester_id: UserId
    status: MatchStatus = MatchStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    approved_at: Optional[datetime] = None
    version: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_distinct_participants(self) -> "Match":
        """A user cannot match with themselves."""
        if self.picker_id == self.requester_id:
            raise ValueError("Picker and requester must be different users")
        return self

    @property
    def is_accepted(self) -> bool:
        return self.status == MatchStatus.ACCEPTED

    def involves(self, user_id: UserId) -> bool:
        """Check whether the user is on either side of the match."""
        return user_id in (self.picker_id, self.requester_id)

    def role_of(self, user_id: UserId) -> Optional[ParticipantRole]:
        """Return the user's side of the match, or None for outsiders."""
        if user_id == self.picker_id:
            return ParticipantRole.PICKER
        if user_id == self.requester_id:
            return ParticipantRole.REQUESTER
        return None

    def accept(self, now: datetime) -> "Match":
        """Requester approves the proposal."""
        return self._transition(MatchStatus.ACCEPTED, approved_at=now)

    def decline(self) -> "Match":
        """Requester turns the proposal down."""
        return self._transition(MatchStatus.DECLINED)

    def complete(self) -> "Match":
        """Meetup for this match has finished."""
        return self._transition(MatchStatus.COMPLETED)

    def _transition(self, target: MatchStatus, **changes: object) -> "Match":
        if not self.status.can_transition_to(target):
            raise InvalidStateError(
                "Match", str(self.id), self.status.value, f"move to {target.value}"
            )
        return self.model_copy(update={"status": target, **changes})
