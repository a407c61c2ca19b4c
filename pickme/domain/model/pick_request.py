"""Pick request aggregate root.

A pick request is an open "I want company" post pinned to a location. It
lives for a fixed TTL and moves through the statuses in ``PickStatus``.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from pickme.domain.error import InvalidStateError
from pickme.domain.model.common import DomainModel
from pickme.domain.value import ActivityType, GeoPoint, PickRequestId, PickStatus, UserId


class PickRequest(DomainModel):
    """Pick request aggregate root.

    Business rules:
    - Created ACTIVE, expires ``expires_at`` unless matched first
    - ACTIVE <-> MATCHED is driven by match proposals and declines
    - COMPLETED, EXPIRED and CANCELLED are terminal

    ``version`` is bumped by the repository on every update and is used for
    optimistic concurrency control.
    """

    id: PickRequestId
    owner_id: UserId
    activity_type: ActivityType
    subject: str = Field(min_length=1, max_length=200)
    duration_minutes: int = Field(gt=0)
    location: GeoPoint
    status: PickStatus = PickStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime
    version: int = Field(default=0, ge=0)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the TTL has passed."""
        now = now or datetime.now(timezone.utc)
        return now > self.expires_at

    def transition(self, target: PickStatus) -> "PickRequest":
        """Return a copy in ``target`` status.

        Raises:
            InvalidStateError: If the transition is not allowed from the current status
        """
        if not self.status.can_transition_to(target):
            raise InvalidStateError(
                "PickRequest", str(self.id), self.status.value, f"move to {target.value}"
            )
        return self.model_copy(update={"status": target})
