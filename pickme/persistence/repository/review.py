"""PostgreSQL implementation of Review repository."""

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from pickme.domain.model import Review
from pickme.domain.repository import ReviewRepository
from pickme.domain.value import UserId
from pickme.persistence.mappers import review_to_dict, row_to_review
from pickme.persistence.tables import reviews_table


class PostgresReviewRepository(ReviewRepository):
    """PostgreSQL implementation of ReviewRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, review: Review) -> Review:
        """Insert a new review.

        Raises:
            IntegrityError: If the reviewer already reviewed this meetup
        """
        stmt = insert(reviews_table).values(**review_to_dict(review))
        await self.session.execute(stmt)
        await self.session.flush()
        return review

    async def find_by_reviewed_user(self, user_id: UserId) -> list[Review]:
        """Find all reviews received by a user, oldest first."""
        stmt = (
            select(reviews_table)
            .where(reviews_table.c.reviewed_user_id == user_id)
            .order_by(reviews_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_review(dict(row)) for row in result.mappings().all()]

    async def average_rating(self, user_id: UserId) -> float | None:
        """Average rating received by a user, None without reviews."""
        stmt = select(func.avg(reviews_table.c.rating)).where(
            reviews_table.c.reviewed_user_id == user_id
        )
        result = await self.session.execute(stmt)
        average = result.scalar_one_or_none()
        return float(average) if average is not None else None
