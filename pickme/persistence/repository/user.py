"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.error import StorageConflictError
from pickme.domain.model import User
from pickme.domain.repository import UserRepository
from pickme.domain.value import UserId
from pickme.persistence.mappers import row_to_user, user_to_dict
from pickme.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Batch-load users by ID."""
        if not user_ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(set(user_ids)))
        result = await self.session.execute(stmt)
        users = [row_to_user(dict(row)) for row in result.mappings().all()]
        return {user.id: user for user in users}

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def increment_completed_meetups(self, user_id: UserId) -> None:
        """Atomically increment the completed meetup counter by 1.

        Args:
            user_id: User ID to update
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(completed_meetups=users_table.c.completed_meetups + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_safety_score(
        self, user_id: UserId, expected: int, new_score: int
    ) -> None:
        """Compare-and-set the safety score.

        Raises:
            StorageConflictError: If the stored score is no longer ``expected``
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .where(users_table.c.safety_score == expected)
            .values(safety_score=new_score)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise StorageConflictError(
                f"Safety score of user {user_id} changed concurrently"
            )
