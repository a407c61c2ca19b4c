"""PostgreSQL implementation of the GeoIndex.

Plain latitude/longitude columns, no PostGIS. A bounding box on the indexed
columns narrows the scan, then the haversine formula in SQL does the exact
radius check.
"""

from math import cos, radians

from sqlalchemy import ColumnElement, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.geo import EARTH_RADIUS_METERS, bounding_box
from pickme.domain.model import PickRequest
from pickme.domain.repository import GeoIndex
from pickme.domain.value import GeoPoint, PickStatus
from pickme.persistence.mappers import row_to_pick_request
from pickme.persistence.tables import pick_requests_table


def haversine_sql(origin: GeoPoint) -> ColumnElement[float]:
    """Great-circle distance in metres from ``origin`` to each row."""
    lat1 = radians(origin.latitude)
    lat2 = func.radians(pick_requests_table.c.latitude)
    dlat = lat2 - lat1
    dlon = func.radians(pick_requests_table.c.longitude) - radians(origin.longitude)

    h = func.power(func.sin(dlat / 2), 2) + cos(lat1) * func.cos(lat2) * func.power(
        func.sin(dlon / 2), 2
    )
    # Rounding can push h a hair past 1 for antipodal points
    h = func.least(h, 1.0)
    return 2 * EARTH_RADIUS_METERS * func.atan2(func.sqrt(h), func.sqrt(1 - h))


class PostgresGeoIndex(GeoIndex):
    """GeoIndex over the pick_requests table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize index with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_active_within(
        self, origin: GeoPoint, radius_meters: float
    ) -> list[PickRequest]:
        """Find ACTIVE pick requests within a radius, nearest first."""
        box = bounding_box(origin, radius_meters)
        distance = haversine_sql(origin)

        conditions = [
            pick_requests_table.c.status == PickStatus.ACTIVE.value,
            pick_requests_table.c.latitude.between(box.min_latitude, box.max_latitude),
        ]
        if box.min_longitude is not None and box.max_longitude is not None:
            conditions.append(
                pick_requests_table.c.longitude.between(
                    box.min_longitude, box.max_longitude
                )
            )

        stmt = (
            select(pick_requests_table)
            .where(and_(*conditions))
            .where(distance <= radius_meters)
            .order_by(distance)
        )
        result = await self.session.execute(stmt)
        return [row_to_pick_request(dict(row)) for row in result.mappings().all()]
