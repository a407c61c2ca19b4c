"""PostgreSQL implementation of Meetup repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.error import StorageConflictError
from pickme.domain.model import Meetup
from pickme.domain.repository import MeetupRepository
from pickme.domain.value import MatchId, MeetupId
from pickme.persistence.mappers import meetup_to_dict, row_to_meetup
from pickme.persistence.tables import meetups_table


class PostgresMeetupRepository(MeetupRepository):
    """PostgreSQL implementation of MeetupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, meetup_id: MeetupId) -> Optional[Meetup]:
        """Find a meetup by ID."""
        stmt = select(meetups_table).where(meetups_table.c.id == meetup_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_meetup(dict(row)) if row else None

    async def find_by_match(self, match_id: MatchId) -> Optional[Meetup]:
        """Find the meetup for a match."""
        stmt = select(meetups_table).where(meetups_table.c.match_id == match_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_meetup(dict(row)) if row else None

    async def save(self, meetup: Meetup) -> Meetup:
        """Insert a new meetup."""
        stmt = insert(meetups_table).values(**meetup_to_dict(meetup))
        await self.session.execute(stmt)
        await self.session.flush()
        return meetup

    async def update(self, meetup: Meetup) -> Meetup:
        """Write a changed meetup back, guarded by its version.

        Raises:
            StorageConflictError: If the stored version no longer matches
        """
        values = meetup_to_dict(meetup)
        values.pop("id")
        values["version"] = meetup.version + 1

        stmt = (
            update(meetups_table)
            .where(meetups_table.c.id == meetup.id)
            .where(meetups_table.c.version == meetup.version)
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise StorageConflictError(
                f"Meetup {meetup.id} changed since version {meetup.version}"
            )
        return meetup.model_copy(update={"version": meetup.version + 1})
