"""In-memory pick request repository for testing."""

from datetime import datetime
from typing import Optional

from pickme.domain.error import StorageConflictError
from pickme.domain.model.pick_request import PickRequest
from pickme.domain.repository.pick_request import PickRequestRepository
from pickme.domain.value import PickRequestId, PickStatus, UserId

from .base import InMemoryStore


class InMemoryPickRequestRepository(InMemoryStore, PickRequestRepository):
    """In-memory implementation of PickRequestRepository for testing."""

    _state_attrs = ("_pick_requests",)

    def __init__(self) -> None:
        self._pick_requests: dict[PickRequestId, PickRequest] = {}

    async def find_by_id(self, pick_request_id: PickRequestId) -> Optional[PickRequest]:
        """Find a pick request by ID."""
        return self._pick_requests.get(pick_request_id)

    async def find_by_owner(self, owner_id: UserId) -> list[PickRequest]:
        """Find a user's pick requests, newest first."""
        owned = [p for p in self._pick_requests.values() if p.owner_id == owner_id]
        owned.sort(key=lambda p: p.created_at, reverse=True)
        return owned

    async def find_expired_active(self, now: datetime) -> list[PickRequest]:
        """Find ACTIVE pick requests past their expiry time."""
        expired = [
            p
            for p in self._pick_requests.values()
            if p.status == PickStatus.ACTIVE and p.expires_at < now
        ]
        expired.sort(key=lambda p: p.expires_at)
        return expired

    async def find_all(self) -> list[PickRequest]:
        """All stored pick requests, for the in-memory geo index."""
        return list(self._pick_requests.values())

    async def save(self, pick_request: PickRequest) -> PickRequest:
        """Insert a new pick request."""
        self._pick_requests[pick_request.id] = pick_request
        return pick_request

    async def update(self, pick_request: PickRequest) -> PickRequest:
        """Write back a changed pick request, guarded by its version."""
        stored = self._pick_requests.get(pick_request.id)
        if stored is None or stored.version != pick_request.version:
            raise StorageConflictError(
                f"PickRequest {pick_request.id} changed since version {pick_request.version}"
            )
        updated = pick_request.model_copy(update={"version": pick_request.version + 1})
        self._pick_requests[pick_request.id] = updated
        return updated
