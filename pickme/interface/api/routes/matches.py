"""Match routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from pickme.application.usecase.match import (
    ListMatchesRequest,
    ListMatchesResponse,
    ListMatchesUseCase,
    ProposeMatchRequest,
    ProposeMatchResponse,
    ProposeMatchUseCase,
    RespondToMatchRequest,
    RespondToMatchResponse,
    RespondToMatchUseCase,
)
from pickme.domain.error import DomainError
from pickme.domain.service import JWTService
from pickme.interface.api.auth import require_caller
from pickme.interface.error import to_http_exception

router = APIRouter(prefix="/matches", tags=["matches"], route_class=DishkaRoute)


class ProposeMatchAPIRequest(BaseModel):
    """API request for proposing to meet."""

    pick_request_id: UUID


class RespondToMatchAPIRequest(BaseModel):
    """API request for the requester's decision."""

    approve: bool


@router.post(
    "", response_model=ProposeMatchResponse, status_code=status.HTTP_201_CREATED
)
async def propose_match(
    request: ProposeMatchAPIRequest,
    propose_match_use_case: FromDishka[ProposeMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ProposeMatchResponse:
    """Propose to meet the owner of an active pick request.

    Raises:
        HTTPException: 400 for your own request, 409 if the request is no
            longer active or you already proposed
    """
    picker_id = require_caller(jwt_service, auth_token, "propose a match")

    try:
        return await propose_match_use_case.execute(
            ProposeMatchRequest(
                pick_request_id=str(request.pick_request_id), picker_id=picker_id
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.put("/{match_id}/respond", response_model=RespondToMatchResponse)
async def respond_to_match(
    match_id: UUID,
    request: RespondToMatchAPIRequest,
    respond_to_match_use_case: FromDishka[RespondToMatchUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RespondToMatchResponse:
    """Approve or decline a pending match. Only the requester may answer."""
    caller_id = require_caller(jwt_service, auth_token, "respond to a match")

    try:
        return await respond_to_match_use_case.execute(
            RespondToMatchRequest(
                match_id=str(match_id),
                approve=request.approve,
                caller_id=caller_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=ListMatchesResponse)
async def list_my_matches(
    list_matches_use_case: FromDishka[ListMatchesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListMatchesResponse:
    """List matches where the caller is either the picker or the requester."""
    user_id = require_caller(jwt_service, auth_token, "list your matches")

    return await list_matches_use_case.execute(ListMatchesRequest(user_id=user_id))
