"""PostgreSQL implementation of Match repository."""

from typing import Optional

from sqlalchemy import and_, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.error import StorageConflictError
from pickme.domain.model import Match
from pickme.domain.repository import MatchRepository
from pickme.domain.value import MatchId, PickRequestId, UserId
from pickme.persistence.mappers import match_to_dict, row_to_match
from pickme.persistence.tables import matches_table


class PostgresMatchRepository(MatchRepository):
    """PostgreSQL implementation of MatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        stmt = select(matches_table).where(matches_table.c.id == match_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_match(dict(row)) if row else None

    async def find_by_request_and_picker(
        self, pick_request_id: PickRequestId, picker_id: UserId
    ) -> Optional[Match]:
        """Find the match a picker made on a pick request."""
        stmt = select(matches_table).where(
            and_(
                matches_table.c.pick_request_id == pick_request_id,
                matches_table.c.picker_id == picker_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_match(dict(row)) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Match]:
        """Find matches where the user is on either side, newest first."""
        stmt = (
            select(matches_table)
            .where(
                or_(
                    matches_table.c.picker_id == user_id,
                    matches_table.c.requester_id == user_id,
                )
            )
            .order_by(matches_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_match(dict(row)) for row in result.mappings().all()]

    async def save(self, match: Match) -> Match:
        """Insert a new match.

        Raises:
            IntegrityError: If the (pick request, picker) pair already exists
        """
        stmt = insert(matches_table).values(**match_to_dict(match))
        await self.session.execute(stmt)
        await self.session.flush()
        return match

    async def update(self, match: Match) -> Match:
        """Write a changed match back, guarded by its version.

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        values = match_to_dict(match)
        values.pop("id")
        values["version"] = match.version + 1

        stmt = (
            update(matches_table)
            .where(matches_table.c.id == match.id)
            .where(matches_table.c.version == match.version)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise StorageConflictError(
                f"Match {match.id} changed since version {match.version}"
            )
        return match.model_copy(update={"version": match.version + 1})
