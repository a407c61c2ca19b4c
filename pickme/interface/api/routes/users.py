"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from pickme.application.usecase.review import (
    GetAverageRatingRequest,
    GetAverageRatingResponse,
    GetAverageRatingUseCase,
)
from pickme.domain.error import DomainError
from pickme.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/rating", response_model=GetAverageRatingResponse)
async def get_user_rating(
    user_id: UUID,
    get_average_rating_use_case: FromDishka[GetAverageRatingUseCase],
) -> GetAverageRatingResponse:
    """Get a user's average review rating and safety score.

    ``average_rating`` is null until the user has been reviewed.
    """
    try:
        return await get_average_rating_use_case.execute(
            GetAverageRatingRequest(user_id=str(user_id))
        )
    except DomainError as e:
        raise to_http_exception(e) from e
