"""PostgreSQL implementation of PickRequest repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.error import StorageConflictError
from pickme.domain.model import PickRequest
from pickme.domain.repository import PickRequestRepository
from pickme.domain.value import PickRequestId, PickStatus, UserId
from pickme.persistence.mappers import pick_request_to_dict, row_to_pick_request
from pickme.persistence.tables import pick_requests_table


class PostgresPickRequestRepository(PickRequestRepository):
    """PostgreSQL implementation of PickRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, pick_request_id: PickRequestId) -> Optional[PickRequest]:
        """Find a pick request by ID."""
        stmt = select(pick_requests_table).where(
            pick_requests_table.c.id == pick_request_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_pick_request(dict(row)) if row else None

    async def find_by_owner(self, owner_id: UserId) -> list[PickRequest]:
        """Find all pick requests created by a user, newest first."""
        stmt = (
            select(pick_requests_table)
            .where(pick_requests_table.c.owner_id == owner_id)
            .order_by(pick_requests_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_pick_request(dict(row)) for row in result.mappings().all()]

    async def find_expired_active(self, now: datetime) -> list[PickRequest]:
        """Find ACTIVE pick requests past their expiry time."""
        stmt = (
            select(pick_requests_table)
            .where(
                and_(
                    pick_requests_table.c.status == PickStatus.ACTIVE.value,
                    pick_requests_table.c.expires_at < now,
                )
            )
            .order_by(pick_requests_table.c.expires_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_pick_request(dict(row)) for row in result.mappings().all()]

    async def save(self, pick_request: PickRequest) -> PickRequest:
        """Insert a new pick request."""
        stmt = insert(pick_requests_table).values(**pick_request_to_dict(pick_request))
        await self.session.execute(stmt)
        await self.session.flush()
        return pick_request

    async def update(self, pick_request: PickRequest) -> PickRequest:
        """Write a changed pick request back, guarded by its version.

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        values = pick_request_to_dict(pick_request)
        values.pop("id")
        values["version"] = pick_request.version + 1

        stmt = (
            update(pick_requests_table)
            .where(pick_requests_table.c.id == pick_request.id)
            .where(pick_requests_table.c.version == pick_request.version)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise StorageConflictError(
                f"PickRequest {pick_request.id} changed since version {pick_request.version}"
            )
        return pick_request.model_copy(update={"version": pick_request.version + 1})
