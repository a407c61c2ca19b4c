"""Submit review use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from pickme.application.usecase.base import BaseUseCase
from pickme.domain.service import ReviewService
from pickme.domain.value import MeetupId, UserId


class SubmitReviewRequest(BaseModel):
    """Submit review request."""

    meetup_id: str
    reviewer_id: str  # User ID from authenticated user
    reviewed_user_id: str
    rating: int
    badges: list[str] = Field(default_factory=list)
    would_meet_again: bool | None = None
    comment: str | None = None


class SubmitReviewResponse(BaseModel):
    """Submit review response."""

    review_id: str
    meetup_id: str
    reviewer_id: str
    reviewed_user_id: str
    rating: int
    badges: list[str]
    would_meet_again: bool | None
    comment: str | None
    created_at: datetime


class SubmitReviewUseCase(BaseUseCase):
    """Use case for rating the other participant after a meetup."""

    def __init__(self, review_service: ReviewService) -> None:
        """Initialize submit review use case.

        Args:
            review_service: Review domain service
        """
        self.review_service = review_service

    async def execute(self, request: SubmitReviewRequest) -> SubmitReviewResponse:
        """Execute submit review flow.

        Raises:
            ValidationError: If the rating is outside 1..5
            NotFoundError: If the meetup does not exist
            InvalidStateError: If the meetup is not COMPLETED
            ForbiddenError: If the reviewer/reviewed pair is not the meetup's participants
            DuplicateReviewError: If the reviewer already reviewed the meetup
        """
        with logfire.span("submit_review.execute", meetup_id=request.meetup_id):
            review = await self.review_service.submit(
                meetup_id=MeetupId(UUID(request.meetup_id)),
                reviewer_id=UserId(UUID(request.reviewer_id)),
                reviewed_user_id=UserId(UUID(request.reviewed_user_id)),
                rating=request.rating,
                badges=request.badges,
                would_meet_again=request.would_meet_again,
                comment=request.comment,
            )

            return SubmitReviewResponse(
                review_id=str(review.id),
                meetup_id=str(review.meetup_id),
                reviewer_id=str(review.reviewer_id),
                reviewed_user_id=str(review.reviewed_user_id),
                rating=review.rating,
                badges=review.badges,
                would_meet_again=review.would_meet_again,
                comment=review.comment,
                created_at=review.created_at,
            )
