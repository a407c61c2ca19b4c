"""In-memory GeoIndex for testing."""

from pickme.domain.geo import haversine_meters
from pickme.domain.model.pick_request import PickRequest
from pickme.domain.repository.geo_index import GeoIndex
from pickme.domain.value import GeoPoint, PickStatus

from .pick_request import InMemoryPickRequestRepository


class InMemoryGeoIndex(GeoIndex):
    """Linear scan over the in-memory pick request repository."""

    def __init__(self, pick_request_repository: InMemoryPickRequestRepository) -> None:
        self.pick_request_repository = pick_request_repository

    async def find_active_within(
        self, origin: GeoPoint, radius_meters: float
    ) -> list[PickRequest]:
        """Find ACTIVE pick requests within a radius."""
        return [
            p
            for p in await self.pick_request_repository.find_all()
            if p.status == PickStatus.ACTIVE
            and haversine_meters(origin, p.location) <= radius_meters
        ]
