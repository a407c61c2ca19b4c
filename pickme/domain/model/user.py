"""User aggregate root.

Accounts are owned by the account subsystem. The matching core only reads
profiles and updates the reputation counters through explicit operations.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from pickme.domain.model.common import DomainModel
from pickme.domain.value import SafetyScore, UserId


class User(DomainModel):
    """User aggregate root.

    ``safety_score`` is bounded to 0..100 and starts at 50.
    ``completed_meetups`` only grows, one per dual-confirmed meetup end.
    """

    id: UserId
    email: str
    name: str = Field(min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=0)
    bio: Optional[str] = None
    interests: list[str] = Field(default_factory=list)
    safety_score: int = Field(
        default=SafetyScore.DEFAULT, ge=SafetyScore.MIN, le=SafetyScore.MAX
    )
    completed_meetups: int = Field(default=0, ge=0)
    is_verified: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
