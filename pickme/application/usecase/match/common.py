"""Response models shared by match use cases."""

from datetime import datetime

from pydantic import BaseModel

from pickme.domain.model import Match
from pickme.domain.value import MatchStatus


class MatchSummary(BaseModel):
    """Match as returned to clients."""

    match_id: str
    pick_request_id: str
    picker_id: str
    requester_id: str
    status: MatchStatus
    created_at: datetime
    approved_at: datetime | None

    @classmethod
    def from_domain(cls, match: Match) -> "MatchSummary":
        return cls(
            match_id=str(match.id),
            pick_request_id=str(match.pick_request_id),
            picker_id=str(match.picker_id),
            requester_id=str(match.requester_id),
            status=match.status,
            created_at=match.created_at,
            approved_at=match.approved_at,
        )
