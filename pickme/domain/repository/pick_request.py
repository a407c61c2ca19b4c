"""Pick request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from pickme.domain.model.pick_request import PickRequest
from pickme.domain.value import PickRequestId, UserId


class PickRequestRepository(ABC):
    """Repository for PickRequest aggregate.

    Defines the contract for pick request persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, pick_request_id: PickRequestId) -> Optional[PickRequest]:
        """Find a pick request by ID.

        Args:
            pick_request_id: The pick request's unique identifier

        Returns:
            The pick request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: UserId) -> list[PickRequest]:
        """Find all pick requests created by a user, newest first.

        Args:
            owner_id: The owner's user ID

        Returns:
            List of pick requests
        """
        pass

    @abstractmethod
    async def find_expired_active(self, now: datetime) -> list[PickRequest]:
        """Find ACTIVE pick requests whose ``expires_at`` is before ``now``.

        Args:
            now: Reference time

        Returns:
            List of pick requests due for expiry
        """
        pass

    @abstractmethod
    async def save(self, pick_request: PickRequest) -> PickRequest:
        """Insert a new pick request.

        Args:
            pick_request: The pick request to insert

        Returns:
            The saved pick request
        """
        pass

    @abstractmethod
    async def update(self, pick_request: PickRequest) -> PickRequest:
        """Write a changed pick request back, guarded by its version.

        Args:
            pick_request: The pick request carrying the version it was read at

        Returns:
            The stored pick request with its version bumped

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        pass
