"""Review domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from pickme.domain.error import (
    DuplicateReviewError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from pickme.domain.model import Review
from pickme.domain.repository import (
    MeetupRepository,
    ReviewRepository,
    TransactionRunner,
    UserRepository,
)
from pickme.domain.repository.constraint import REVIEW_MEETUP_REVIEWER_UNIQUE, violates
from pickme.domain.value import MeetupId, MeetupStatus, ReviewId, SafetyScore, UserId

from .base import Service
from .safety_policy import SafetyScorePolicy, unchanged_policy


class ReviewService(Service):
    """Domain service for post-meetup reviews and reputation."""

    def __init__(
        self,
        review_repository: ReviewRepository,
        meetup_repository: MeetupRepository,
        user_repository: UserRepository,
        transactions: TransactionRunner,
        safety_policy: SafetyScorePolicy = unchanged_policy,
    ) -> None:
        """Initialize review service.

        Args:
            review_repository: Review repository
            meetup_repository: Meetup repository
            user_repository: User repository
            transactions: Unit-of-work runner
            safety_policy: How a review moves the reviewed user's safety score
        """
        self.review_repository = review_repository
        self.meetup_repository = meetup_repository
        self.user_repository = user_repository
        self.transactions = transactions
        self.safety_policy = safety_policy

    async def submit(
        self,
        meetup_id: MeetupId,
        reviewer_id: UserId,
        reviewed_user_id: UserId,
        rating: int,
        badges: list[str] | None = None,
        would_meet_again: bool | None = None,
        comment: str | None = None,
    ) -> Review:
        """Review the other participant of a completed meetup.

        The reviewed user's safety score is recomputed in the same
        transaction.

        Args:
            meetup_id: Completed meetup
            reviewer_id: Participant writing the review
            reviewed_user_id: The other participant
            rating: 1 to 5 stars
            badges: Optional tags such as "Friendly"
            would_meet_again: Optional yes/no
            comment: Optional free text

        Returns:
            Created review

        Raises:
            ValidationError: If the rating is out of range
            NotFoundError: If the meetup or reviewed user does not exist
            InvalidStateError: If the meetup is not COMPLETED
            ForbiddenError: If reviewer and reviewed user are not the two participants
            DuplicateReviewError: If the reviewer already reviewed this meetup
        """
        with logfire.span(
            "review_service.submit",
            meetup_id=str(meetup_id),
            reviewer_id=str(reviewer_id),
            rating=rating,
        ):
            if not 1 <= rating <= 5:
                raise ValidationError("Rating must be between 1 and 5")

            async def work() -> Review:
                meetup = await self.meetup_repository.find_by_id(meetup_id)
                if not meetup:
                    raise NotFoundError("Meetup", str(meetup_id))
                if meetup.status != MeetupStatus.COMPLETED:
                    raise InvalidStateError(
                        "Meetup", str(meetup_id), meetup.status.value, "review"
                    )

                participants = {meetup.picker_id, meetup.requester_id}
                if (
                    reviewer_id not in participants
                    or reviewed_user_id not in participants
                    or reviewer_id == reviewed_user_id
                ):
                    raise ForbiddenError(
                        "Meetup", str(meetup_id), str(reviewer_id), "review"
                    )

                reviewed_user = await self.user_repository.find_by_id(reviewed_user_id)
                if not reviewed_user:
                    raise NotFoundError("User", str(reviewed_user_id))

                history = await self.review_repository.find_by_reviewed_user(
                    reviewed_user_id
                )

                try:
                    review = Review(
                        id=ReviewId(uuid4()),
                        meetup_id=meetup_id,
                        reviewer_id=reviewer_id,
                        reviewed_user_id=reviewed_user_id,
                        rating=rating,
                        badges=list(badges or []),
                        would_meet_again=would_meet_again,
                        comment=comment,
                        created_at=datetime.now(timezone.utc),
                    )
                except PydanticValidationError as e:
                    raise ValidationError(str(e)) from e
                try:
                    saved = await self.review_repository.save(review)
                except IntegrityError as e:
                    if not violates(e, REVIEW_MEETUP_REVIEWER_UNIQUE):
                        raise
                    logfire.warn(
                        "Duplicate review attempt",
                        meetup_id=str(meetup_id),
                        reviewer_id=str(reviewer_id),
                    )
                    raise DuplicateReviewError(str(meetup_id), str(reviewer_id)) from e

                current = reviewed_user.safety_score
                new_score = SafetyScore.clamp(
                    self.safety_policy(current, saved, history)
                )
                if new_score != current:
                    await self.user_repository.update_safety_score(
                        reviewed_user_id, current, new_score
                    )
                    logfire.info(
                        "Safety score updated",
                        user_id=str(reviewed_user_id),
                        old=current,
                        new=new_score,
                    )
                return saved

            review = await self.transactions.run(work)
            logfire.info(
                "Review submitted",
                review_id=str(review.id),
                meetup_id=str(meetup_id),
                reviewed_user_id=str(reviewed_user_id),
            )
            return review

    async def average_rating(self, user_id: UserId) -> float | None:
        """Mean star rating received by a user, None without reviews."""
        with logfire.span("review_service.average_rating", user_id=str(user_id)):
            return await self.review_repository.average_rating(user_id)
