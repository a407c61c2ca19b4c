"""Pick request domain service."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from pickme.domain.error import ForbiddenError, NotFoundError, ValidationError
from pickme.domain.model import PickRequest
from pickme.domain.repository import PickRequestRepository, TransactionRunner
from pickme.domain.value import (
    ActivityType,
    GeoPoint,
    PickRequestId,
    PickStatus,
    UserId,
)

from .base import Service
from .user_service import UserService


class PickRequestService(Service):
    """Domain service for the pick request lifecycle.

    Public operations run in their own transaction. ``mark_matched``,
    ``revert_to_active`` and ``mark_completed`` are steps of larger units
    of work owned by the match and meetup services and run in the caller's
    transaction.
    """

    def __init__(
        self,
        pick_request_repository: PickRequestRepository,
        user_service: UserService,
        transactions: TransactionRunner,
        ttl: timedelta = timedelta(hours=2),
    ) -> None:
        """Initialize pick request service.

        Args:
            pick_request_repository: Pick request repository
            user_service: User domain service
            transactions: Unit-of-work runner
            ttl: How long a new request stays ACTIVE
        """
        self.pick_request_repository = pick_request_repository
        self.user_service = user_service
        self.transactions = transactions
        self.ttl = ttl

    async def create(
        self,
        owner_id: UserId,
        activity_type: ActivityType,
        subject: str,
        duration_minutes: int,
        latitude: float,
        longitude: float,
    ) -> PickRequest:
        """Create a new ACTIVE pick request.

        Args:
            owner_id: Requester's user ID
            activity_type: Kind of activity
            subject: Short description
            duration_minutes: Planned duration, must be positive
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Created pick request

        Raises:
            ValidationError: If any field is malformed
            NotFoundError: If the owner does not exist
        """
        with logfire.span("pick_request_service.create", owner_id=str(owner_id)):
            if duration_minutes <= 0:
                raise ValidationError("Duration must be positive")
            if not subject or not subject.strip():
                raise ValidationError("Subject must not be blank")

            now = datetime.now(timezone.utc)
            try:
                pick_request = PickRequest(
                    id=PickRequestId(uuid4()),
                    owner_id=owner_id,
                    activity_type=activity_type,
                    subject=subject.strip(),
                    duration_minutes=duration_minutes,
                    location=GeoPoint(latitude=latitude, longitude=longitude),
                    status=PickStatus.ACTIVE,
                    created_at=now,
                    expires_at=now + self.ttl,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid pick request", error=str(e))
                raise ValidationError(str(e)) from e

            async def work() -> PickRequest:
                await self.user_service.get_by_id(owner_id)
                return await self.pick_request_repository.save(pick_request)

            saved = await self.transactions.run(work)
            logfire.info(
                "Pick request created",
                pick_request_id=str(saved.id),
                owner_id=str(owner_id),
                activity_type=activity_type.value,
            )
            return saved

    async def get(self, pick_request_id: PickRequestId) -> PickRequest:
        """Get pick request by ID.

        Raises:
            NotFoundError: If the pick request does not exist
        """
        pick_request = await self.pick_request_repository.find_by_id(pick_request_id)
        if not pick_request:
            logfire.warn("Pick request not found", pick_request_id=str(pick_request_id))
            raise NotFoundError("PickRequest", str(pick_request_id))
        return pick_request

    async def cancel(
        self, pick_request_id: PickRequestId, caller_id: UserId
    ) -> PickRequest:
        """Withdraw an ACTIVE pick request.

        Args:
            pick_request_id: Pick request ID
            caller_id: Must be the owner

        Returns:
            The cancelled pick request

        Raises:
            NotFoundError: If the pick request does not exist
            ForbiddenError: If the caller is not the owner
            InvalidStateError: If the pick request is not ACTIVE
        """
        with logfire.span(
            "pick_request_service.cancel",
            pick_request_id=str(pick_request_id),
            caller_id=str(caller_id),
        ):

            async def work() -> PickRequest:
                pick_request = await self.get(pick_request_id)
                if pick_request.owner_id != caller_id:
                    raise ForbiddenError(
                        "PickRequest", str(pick_request_id), str(caller_id), "cancel"
                    )
                return await self.pick_request_repository.update(
                    pick_request.transition(PickStatus.CANCELLED)
                )

            cancelled = await self.transactions.run(work)
            logfire.info("Pick request cancelled", pick_request_id=str(pick_request_id))
            return cancelled

    async def list_own(self, owner_id: UserId) -> list[PickRequest]:
        """List the user's own pick requests, newest first."""
        with logfire.span("pick_request_service.list_own", owner_id=str(owner_id)):
            return await self.pick_request_repository.find_by_owner(owner_id)

    async def expire_sweep(self, now: datetime | None = None) -> int:
        """Expire every ACTIVE pick request whose TTL has passed.

        Each request is expired in its own transaction. A request that fails
        is logged and skipped. A request matched or cancelled since the scan
        is left alone, so running the sweep twice is harmless.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            Number of pick requests expired by this call
        """
        now = now or datetime.now(timezone.utc)
        with logfire.span("pick_request_service.expire_sweep", now=now.isoformat()):
            candidates = await self.pick_request_repository.find_expired_active(now)
            expired = 0
            for candidate in candidates:

                async def work(pick_request_id: PickRequestId = candidate.id) -> bool:
                    return await self._expire_one(pick_request_id, now)

                try:
                    if await self.transactions.run(work):
                        expired += 1
                except Exception as e:
                    logfire.error(
                        "Failed to expire pick request",
                        pick_request_id=str(candidate.id),
                        error=str(e),
                    )

            logfire.info(
                "Expiry sweep finished", candidates=len(candidates), expired=expired
            )
            return expired

    async def _expire_one(self, pick_request_id: PickRequestId, now: datetime) -> bool:
        # Re-read: the row may have been matched or cancelled since the scan
        pick_request = await self.get(pick_request_id)
        if pick_request.status != PickStatus.ACTIVE or not pick_request.is_expired(now):
            return False
        await self.pick_request_repository.update(
            pick_request.transition(PickStatus.EXPIRED)
        )
        logfire.info("Pick request expired", pick_request_id=str(pick_request_id))
        return True

    async def mark_matched(self, pick_request_id: PickRequestId) -> PickRequest:
        """ACTIVE -> MATCHED, inside the caller's transaction.

        Raises:
            NotFoundError: If the pick request does not exist
            InvalidStateError: If the pick request is not ACTIVE
        """
        return await self._move(pick_request_id, PickStatus.MATCHED)

    async def revert_to_active(self, pick_request_id: PickRequestId) -> PickRequest:
        """MATCHED -> ACTIVE after a decline, inside the caller's transaction.

        Raises:
            NotFoundError: If the pick request does not exist
            InvalidStateError: If the pick request is not MATCHED
        """
        return await self._move(pick_request_id, PickStatus.ACTIVE)

    async def mark_completed(self, pick_request_id: PickRequestId) -> PickRequest:
        """MATCHED -> COMPLETED once the meetup ends, inside the caller's transaction.

        Raises:
            NotFoundError: If the pick request does not exist
            InvalidStateError: If the pick request is not MATCHED
        """
        return await self._move(pick_request_id, PickStatus.COMPLETED)

    async def _move(
        self, pick_request_id: PickRequestId, target: PickStatus
    ) -> PickRequest:
        pick_request = await self.get(pick_request_id)
        updated = await self.pick_request_repository.update(
            pick_request.transition(target)
        )
        logfire.info(
            "Pick request status changed",
            pick_request_id=str(pick_request_id),
            status=target.value,
        )
        return updated
