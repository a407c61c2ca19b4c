"""Review entity.

After a completed meetup each participant may rate the other once.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from pickme.domain.model.common import DomainModel
from pickme.domain.value import MeetupId, ReviewId, UserId


class Review(DomainModel):
    """Review entity.

    Business rules:
    - One review per (meetup, reviewer), enforced by a unique constraint
    - Rating is 1-5 stars; 4 and up counts as positive
    - Badges are free-form tags like "Friendly" or "Punctual"
    """

    id: ReviewId
    meetup_id: MeetupId
    reviewer_id: UserId
    reviewed_user_id: UserId
    rating: int = Field(ge=1, le=5)
    badges: list[str] = Field(default_factory=list)
    would_meet_again: Optional[bool] = None
    comment: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_positive(self) -> bool:
        return self.rating >= 4
