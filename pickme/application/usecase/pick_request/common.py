"""Response models shared by pick request use cases."""

from datetime import datetime

from pydantic import BaseModel

from pickme.domain.model import PickRequest
from pickme.domain.value import ActivityType, PickStatus


class PickRequestSummary(BaseModel):
    """Pick request as returned to clients."""

    pick_request_id: str
    owner_id: str
    activity_type: ActivityType
    activity_label: str
    subject: str
    duration_minutes: int
    latitude: float
    longitude: float
    status: PickStatus
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(cls, pick_request: PickRequest) -> "PickRequestSummary":
        return cls(
            pick_request_id=str(pick_request.id),
            owner_id=str(pick_request.owner_id),
            activity_type=pick_request.activity_type,
            activity_label=pick_request.activity_type.display_name,
            subject=pick_request.subject,
            duration_minutes=pick_request.duration_minutes,
            latitude=pick_request.location.latitude,
            longitude=pick_request.location.longitude,
            status=pick_request.status,
            created_at=pick_request.created_at,
            expires_at=pick_request.expires_at,
        )
