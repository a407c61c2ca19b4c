"""In-memory review repository for testing."""

from sqlalchemy.exc import IntegrityError

from pickme.domain.model.review import Review
from pickme.domain.repository.constraint import REVIEW_MEETUP_REVIEWER_UNIQUE
from pickme.domain.repository.review import ReviewRepository
from pickme.domain.value import ReviewId, UserId

from .base import InMemoryStore


class InMemoryReviewRepository(InMemoryStore, ReviewRepository):
    """In-memory implementation of ReviewRepository for testing."""

    _state_attrs = ("_reviews",)

    def __init__(self) -> None:
        self._reviews: dict[ReviewId, Review] = {}

    async def save(self, review: Review) -> Review:
        """Insert a new review.

        Raises:
            IntegrityError: If the reviewer already reviewed this meetup
        """
        for existing in self._reviews.values():
            if (
                existing.meetup_id == review.meetup_id
                and existing.reviewer_id == review.reviewer_id
            ):
                raise IntegrityError(
                    "INSERT INTO reviews",
                    None,
                    Exception(
                        "duplicate key value violates unique constraint "
                        f'"{REVIEW_MEETUP_REVIEWER_UNIQUE}"'
                    ),
                )

        self._reviews[review.id] = review
        return review

    async def find_by_reviewed_user(self, user_id: UserId) -> list[Review]:
        """Find all reviews received by a user, oldest first."""
        received = [r for r in self._reviews.values() if r.reviewed_user_id == user_id]
        received.sort(key=lambda r: r.created_at)
        return received

    async def average_rating(self, user_id: UserId) -> float | None:
        """Average rating received by a user."""
        ratings = [
            r.rating for r in self._reviews.values() if r.reviewed_user_id == user_id
        ]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)
