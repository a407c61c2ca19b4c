"""Proximity search domain service."""

from dataclasses import dataclass

import logfire
from pydantic import ValidationError as PydanticValidationError

from pickme.domain.error import ValidationError
from pickme.domain.geo import haversine_meters
from pickme.domain.model import PickRequest, User
from pickme.domain.repository import GeoIndex, UserRepository
from pickme.domain.value import GeoPoint, PickStatus, UserId

from .base import Service

DEFAULT_MAX_RADIUS_METERS = 50_000


@dataclass
class NearbyPickRequest:
    """An active pick request near the caller, with its owner's profile."""

    pick_request: PickRequest
    distance_meters: float
    owner: User


class ProximitySearchService(Service):
    """Finds other people's active pick requests around a point."""

    def __init__(
        self,
        geo_index: GeoIndex,
        user_repository: UserRepository,
        max_radius_meters: float = DEFAULT_MAX_RADIUS_METERS,
    ) -> None:
        """Initialize proximity search service.

        Args:
            geo_index: Spatial lookup for active pick requests
            user_repository: User repository, for owner profiles
            max_radius_meters: Largest radius a caller may ask for
        """
        self.geo_index = geo_index
        self.user_repository = user_repository
        self.max_radius_meters = max_radius_meters

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float,
        excluding_user_id: UserId,
    ) -> list[NearbyPickRequest]:
        """Find active pick requests within a radius, nearest first.

        Args:
            latitude: Search centre latitude
            longitude: Search centre longitude
            radius_meters: Search radius in metres
            excluding_user_id: The caller, whose own requests are left out

        Returns:
            Nearby pick requests with haversine distance and owner profile

        Raises:
            ValidationError: If the centre or radius is malformed
        """
        with logfire.span(
            "proximity_service.find_nearby",
            radius_meters=radius_meters,
            user_id=str(excluding_user_id),
        ):
            if not 0 < radius_meters <= self.max_radius_meters:
                raise ValidationError(
                    f"Radius must be in (0, {self.max_radius_meters}] metres"
                )
            try:
                origin = GeoPoint(latitude=latitude, longitude=longitude)
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            candidates = await self.geo_index.find_active_within(origin, radius_meters)
            candidates = [
                pick_request
                for pick_request in candidates
                if pick_request.status == PickStatus.ACTIVE
                and pick_request.owner_id != excluding_user_id
            ]

            # Batch-load owners to avoid N+1
            owners = await self.user_repository.find_by_ids(
                [pick_request.owner_id for pick_request in candidates]
            )

            results = []
            for pick_request in candidates:
                owner = owners.get(pick_request.owner_id)
                if owner is None:
                    logfire.warn(
                        "Pick request owner missing",
                        pick_request_id=str(pick_request.id),
                        owner_id=str(pick_request.owner_id),
                    )
                    continue
                results.append(
                    NearbyPickRequest(
                        pick_request=pick_request,
                        distance_meters=haversine_meters(origin, pick_request.location),
                        owner=owner,
                    )
                )

            results.sort(key=lambda item: item.distance_meters)
            logfire.info("Nearby search finished", count=len(results))
            return results
