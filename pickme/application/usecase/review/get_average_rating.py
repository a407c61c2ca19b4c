"""Get average rating use case."""

from uuid import UUID

from pydantic import BaseModel

from pickme.domain.service import ReviewService, UserService
from pickme.domain.value import UserId


class GetAverageRatingRequest(BaseModel):
    """Get average rating request."""

    user_id: str


class GetAverageRatingResponse(BaseModel):
    """Get average rating response.

    ``average_rating`` is None until the user has been reviewed.
    """

    user_id: str
    average_rating: float | None
    safety_score: int
    completed_meetups: int


class GetAverageRatingUseCase:
    """Use case for a user's public reputation figures."""

    def __init__(self, review_service: ReviewService, user_service: UserService) -> None:
        """Initialize get average rating use case.

        Args:
            review_service: Review domain service
            user_service: User domain service
        """
        self.review_service = review_service
        self.user_service = user_service

    async def execute(self, request: GetAverageRatingRequest) -> GetAverageRatingResponse:
        """Execute get average rating flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_service.get_by_id(user_id)
        average = await self.review_service.average_rating(user_id)

        return GetAverageRatingResponse(
            user_id=str(user.id),
            average_rating=average,
            safety_score=user.safety_score,
            completed_meetups=user.completed_meetups,
        )
