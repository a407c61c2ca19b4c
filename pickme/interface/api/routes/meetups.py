"""Meetup and review routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from pickme.application.usecase.meetup import (
    CancelMeetupUseCase,
    ConfirmMeetupEndUseCase,
    ConfirmMeetupStartUseCase,
    GetMeetupUseCase,
    MeetupActionRequest,
    MeetupActionResponse,
)
from pickme.application.usecase.review import (
    SubmitReviewRequest,
    SubmitReviewResponse,
    SubmitReviewUseCase,
)
from pickme.domain.error import DomainError
from pickme.domain.service import JWTService
from pickme.interface.api.auth import require_caller
from pickme.interface.error import to_http_exception

router = APIRouter(prefix="/meetups", tags=["meetups"], route_class=DishkaRoute)


class SubmitReviewAPIRequest(BaseModel):
    """API request for reviewing the other participant."""

    reviewed_user_id: UUID
    rating: int
    badges: list[str] = Field(default_factory=list)
    would_meet_again: bool | None = None
    comment: str | None = None


@router.get("/{meetup_id}", response_model=MeetupActionResponse)
async def get_meetup(
    meetup_id: UUID,
    get_meetup_use_case: FromDishka[GetMeetupUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MeetupActionResponse:
    """Show a meetup to one of its two participants."""
    caller_id = require_caller(jwt_service, auth_token, "view a meetup")

    try:
        return await get_meetup_use_case.execute(
            MeetupActionRequest(meetup_id=str(meetup_id), caller_id=caller_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{meetup_id}/start", response_model=MeetupActionResponse)
async def confirm_meetup_start(
    meetup_id: UUID,
    confirm_meetup_start_use_case: FromDishka[ConfirmMeetupStartUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MeetupActionResponse:
    """Confirm the meetup has started. It begins once both sides confirm."""
    caller_id = require_caller(jwt_service, auth_token, "start a meetup")

    try:
        return await confirm_meetup_start_use_case.execute(
            MeetupActionRequest(meetup_id=str(meetup_id), caller_id=caller_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{meetup_id}/end", response_model=MeetupActionResponse)
async def confirm_meetup_end(
    meetup_id: UUID,
    confirm_meetup_end_use_case: FromDishka[ConfirmMeetupEndUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MeetupActionResponse:
    """Confirm the meetup has ended. It completes once both sides confirm."""
    caller_id = require_caller(jwt_service, auth_token, "end a meetup")

    try:
        return await confirm_meetup_end_use_case.execute(
            MeetupActionRequest(meetup_id=str(meetup_id), caller_id=caller_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/{meetup_id}/cancel", response_model=MeetupActionResponse)
async def cancel_meetup(
    meetup_id: UUID,
    cancel_meetup_use_case: FromDishka[CancelMeetupUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MeetupActionResponse:
    """Call off a meetup that has not started yet."""
    caller_id = require_caller(jwt_service, auth_token, "cancel a meetup")

    try:
        return await cancel_meetup_use_case.execute(
            MeetupActionRequest(meetup_id=str(meetup_id), caller_id=caller_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "/{meetup_id}/reviews",
    response_model=SubmitReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_review(
    meetup_id: UUID,
    request: SubmitReviewAPIRequest,
    submit_review_use_case: FromDishka[SubmitReviewUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitReviewResponse:
    """Review the other participant of a completed meetup.

    Example:
        POST /meetups/{meetup_id}/reviews
        {
            "reviewed_user_id": "123e4567-e89b-12d3-a456-426614174000",
            "rating": 5,
            "badges": ["punctual"],
            "would_meet_again": true
        }
    """
    reviewer_id = require_caller(jwt_service, auth_token, "submit a review")

    try:
        return await submit_review_use_case.execute(
            SubmitReviewRequest(
                meetup_id=str(meetup_id),
                reviewer_id=reviewer_id,
                reviewed_user_id=str(request.reviewed_user_id),
                rating=request.rating,
                badges=request.badges,
                would_meet_again=request.would_meet_again,
                comment=request.comment,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
