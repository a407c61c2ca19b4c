"""Review repository interface."""

from abc import ABC, abstractmethod

from pickme.domain.model.review import Review
from pickme.domain.value import UserId


class ReviewRepository(ABC):
    """Repository for Review entity."""

    @abstractmethod
    async def save(self, review: Review) -> Review:
        """Insert a new review.

        Args:
            review: The review to insert

        Returns:
            The saved review

        Raises:
            IntegrityError: If the reviewer already reviewed this meetup
        """
        pass

    @abstractmethod
    async def find_by_reviewed_user(self, user_id: UserId) -> list[Review]:
        """Find all reviews received by a user, oldest first.

        Args:
            user_id: The reviewed user's ID

        Returns:
            List of reviews
        """
        pass

    @abstractmethod
    async def average_rating(self, user_id: UserId) -> float | None:
        """Average star rating received by a user.

        Args:
            user_id: The reviewed user's ID

        Returns:
            Mean rating, or None if the user has no reviews
        """
        pass
