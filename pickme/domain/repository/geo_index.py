"""Spatial lookup interface for active pick requests."""

from abc import ABC, abstractmethod

from pickme.domain.model.pick_request import PickRequest
from pickme.domain.value import GeoPoint


class GeoIndex(ABC):
    """Answers "which active pick requests lie within R metres of P".

    Implementations may use whatever spatial support the storage engine has.
    The only contract is that every returned request is ACTIVE and within
    ``radius_meters`` of ``origin`` by great-circle distance.
    """

    @abstractmethod
    async def find_active_within(
        self, origin: GeoPoint, radius_meters: float
    ) -> list[PickRequest]:
        """Find ACTIVE pick requests within a radius.

        Args:
            origin: Centre of the search circle
            radius_meters: Search radius in metres

        Returns:
            Matching pick requests, in no particular order
        """
        pass
