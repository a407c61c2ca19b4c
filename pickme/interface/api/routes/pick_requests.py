"""Pick request routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from pickme.application.usecase.pick_request import (
    CancelPickRequestRequest,
    CancelPickRequestResponse,
    CancelPickRequestUseCase,
    CreatePickRequestRequest,
    CreatePickRequestResponse,
    CreatePickRequestUseCase,
    FindNearbyRequest,
    FindNearbyResponse,
    FindNearbyUseCase,
    ListOwnPickRequestsRequest,
    ListOwnPickRequestsResponse,
    ListOwnPickRequestsUseCase,
)
from pickme.domain.error import DomainError
from pickme.domain.service import JWTService
from pickme.domain.value import ActivityType
from pickme.interface.api.auth import require_caller
from pickme.interface.error import to_http_exception

router = APIRouter(
    prefix="/pick-requests", tags=["pick-requests"], route_class=DishkaRoute
)


class CreatePickRequestAPIRequest(BaseModel):
    """API request for pinning a pick request.

    Range checks on duration and coordinates happen in the domain so that
    they surface as 400s rather than 422s.
    """

    activity_type: ActivityType
    subject: str = Field(..., max_length=200)
    duration_minutes: int
    latitude: float
    longitude: float


@router.post(
    "",
    response_model=CreatePickRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_pick_request(
    request: CreatePickRequestAPIRequest,
    create_pick_request_use_case: FromDishka[CreatePickRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePickRequestResponse:
    """Pin a new pick request at the caller's location.

    Example:
        POST /pick-requests
        {
            "activity_type": "coffee",
            "subject": "Flat white and a chat",
            "duration_minutes": 30,
            "latitude": 52.52,
            "longitude": 13.405
        }
    """
    owner_id = require_caller(jwt_service, auth_token, "create a pick request")

    try:
        return await create_pick_request_use_case.execute(
            CreatePickRequestRequest(
                owner_id=owner_id,
                activity_type=request.activity_type,
                subject=request.subject,
                duration_minutes=request.duration_minutes,
                latitude=request.latitude,
                longitude=request.longitude,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/mine", response_model=ListOwnPickRequestsResponse)
async def list_my_pick_requests(
    list_own_pick_requests_use_case: FromDishka[ListOwnPickRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListOwnPickRequestsResponse:
    """List the caller's pick requests in every status, newest first."""
    owner_id = require_caller(jwt_service, auth_token, "list your pick requests")

    return await list_own_pick_requests_use_case.execute(
        ListOwnPickRequestsRequest(owner_id=owner_id)
    )


@router.get("/nearby", response_model=FindNearbyResponse)
async def find_nearby_pick_requests(
    find_nearby_use_case: FromDishka[FindNearbyUseCase],
    jwt_service: FromDishka[JWTService],
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius_meters: float = Query(..., description="Search radius in meters"),
    auth_token: str | None = Cookie(default=None),
) -> FindNearbyResponse:
    """Find other people's active pick requests within a radius, nearest first.

    Example:
        GET /pick-requests/nearby?latitude=52.52&longitude=13.405&radius_meters=2000
    """
    user_id = require_caller(jwt_service, auth_token, "search for pick requests")

    try:
        return await find_nearby_use_case.execute(
            FindNearbyRequest(
                latitude=latitude,
                longitude=longitude,
                radius_meters=radius_meters,
                user_id=user_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/{pick_request_id}", response_model=CancelPickRequestResponse)
async def cancel_pick_request(
    pick_request_id: UUID,
    cancel_pick_request_use_case: FromDishka[CancelPickRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CancelPickRequestResponse:
    """Withdraw one of the caller's active pick requests."""
    caller_id = require_caller(jwt_service, auth_token, "cancel a pick request")

    try:
        return await cancel_pick_request_use_case.execute(
            CancelPickRequestRequest(
                pick_request_id=str(pick_request_id), caller_id=caller_id
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
