"""Meetup entity.

The tracked real-world encounter following an accepted match. Both people
have to confirm the start and the end independently, so neither side can
claim "we met" or "we're done" on their own.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from pickme.domain.error import InvalidStateError
from pickme.domain.model.common import DomainModel
from pickme.domain.value import (
    MatchId,
    MeetupId,
    MeetupStatus,
    ParticipantRole,
    UserId,
)


class Meetup(DomainModel):
    """Meetup entity, one per accepted match.

    Invariants:
    - ``started_at`` is set iff both start flags are set
    - ``ended_at`` is set iff both end flags are set
    - confirmation flags never go back from True to False
    """

    id: MeetupId
    match_id: MatchId
    picker_id: UserId
    requester_id: UserId
    status: MeetupStatus = MeetupStatus.NOT_STARTED
    picker_confirmed_start: bool = False
    requester_confirmed_start: bool = False
    picker_confirmed_end: bool = False
    requester_confirmed_end: bool = False
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_confirmation_timestamps(self) -> "Meetup":
        """Timestamps must agree with the dual-confirmation flags."""
        if (self.started_at is not None) != self.both_confirmed_start:
            raise ValueError("started_at requires both start confirmations")
        if (self.ended_at is not None) != self.both_confirmed_end:
            raise ValueError("ended_at requires both end confirmations")
        return self

    @property
    def both_confirmed_start(self) -> bool:
        return self.picker_confirmed_start and self.requester_confirmed_start

    @property
    def both_confirmed_end(self) -> bool:
        return self.picker_confirmed_end and self.requester_confirmed_end

    @property
    def duration_minutes(self) -> Optional[int]:
        """Whole minutes between start and end, once both are known."""
        if self.started_at is None or self.ended_at is None:
            return None
        return int((self.ended_at - self.started_at).total_seconds() // 60)

    def role_of(self, user_id: UserId) -> Optional[ParticipantRole]:
        """Return the user's side of the meetup, or None for outsiders."""
        if user_id == self.picker_id:
            return ParticipantRole.PICKER
        if user_id == self.requester_id:
            return ParticipantRole.REQUESTER
        return None

    def confirm_start(self, role: ParticipantRole, now: datetime) -> "Meetup":
        """Record one side's start confirmation.

        Re-confirming is a no-op. When the second side confirms, the meetup
        moves to IN_PROGRESS and ``started_at`` is stamped.

        Raises:
            InvalidStateError: If the meetup is not NOT_STARTED
        """
        self._require(MeetupStatus.NOT_STARTED, "confirm start of")

        flag = f"{role.value}_confirmed_start"
        updated = self if getattr(self, flag) else self.model_copy(update={flag: True})

        if updated.both_confirmed_start:
            updated = updated.model_copy(
                update={"status": MeetupStatus.IN_PROGRESS, "started_at": now}
            )
        return updated

    def confirm_end(self, role: ParticipantRole, now: datetime) -> "Meetup":
        """Record one side's end confirmation.

        Re-confirming is a no-op. When the second side confirms, the meetup
        moves to COMPLETED and ``ended_at`` is stamped.

        Raises:
            InvalidStateError: If the meetup is not IN_PROGRESS
        """
        self._require(MeetupStatus.IN_PROGRESS, "confirm end of")

        flag = f"{role.value}_confirmed_end"
        updated = self if getattr(self, flag) else self.model_copy(update={flag: True})

        if updated.both_confirmed_end:
            updated = updated.model_copy(
                update={"status": MeetupStatus.COMPLETED, "ended_at": now}
            )
        return updated

    def cancel(self) -> "Meetup":
        """Call the meetup off before it started.

        Raises:
            InvalidStateError: If the meetup is not NOT_STARTED
        """
        self._require(MeetupStatus.NOT_STARTED, "cancel")
        return self.model_copy(update={"status": MeetupStatus.CANCELLED})

    def _require(self, expected: MeetupStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidStateError("Meetup", str(self.id), self.status.value, action)
