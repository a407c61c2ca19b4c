"""Application layer DI providers."""

from dishka import Scope, provide

from pickme.application.usecase.match import (
    ListMatchesUseCase,
    ProposeMatchUseCase,
    RespondToMatchUseCase,
)
from pickme.application.usecase.meetup import (
    CancelMeetupUseCase,
    ConfirmMeetupEndUseCase,
    ConfirmMeetupStartUseCase,
    GetMeetupUseCase,
)
from pickme.application.usecase.pick_request import (
    CancelPickRequestUseCase,
    CreatePickRequestUseCase,
    FindNearbyUseCase,
    ListOwnPickRequestsUseCase,
)
from pickme.application.usecase.review import (
    GetAverageRatingUseCase,
    SubmitReviewUseCase,
)
from pickme.domain.service import (
    MatchService,
    MeetupService,
    PickRequestService,
    ProximitySearchService,
    ReviewService,
    UserService,
)
from pickme.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Pick request use cases
    @provide(scope=Scope.REQUEST)
    def get_create_pick_request_use_case(
        self, pick_request_service: PickRequestService
    ) -> CreatePickRequestUseCase:
        """Provide create pick request use case."""
        return CreatePickRequestUseCase(pick_request_service=pick_request_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_pick_request_use_case(
        self, pick_request_service: PickRequestService
    ) -> CancelPickRequestUseCase:
        """Provide cancel pick request use case."""
        return CancelPickRequestUseCase(pick_request_service=pick_request_service)

    @provide(scope=Scope.REQUEST)
    def get_list_own_pick_requests_use_case(
        self, pick_request_service: PickRequestService
    ) -> ListOwnPickRequestsUseCase:
        """Provide list own pick requests use case."""
        return ListOwnPickRequestsUseCase(pick_request_service=pick_request_service)

    @provide(scope=Scope.REQUEST)
    def get_find_nearby_use_case(
        self, proximity_search_service: ProximitySearchService
    ) -> FindNearbyUseCase:
        """Provide find nearby use case."""
        return FindNearbyUseCase(proximity_search_service=proximity_search_service)

    # Match use cases
    @provide(scope=Scope.REQUEST)
    def get_propose_match_use_case(
        self, match_service: MatchService
    ) -> ProposeMatchUseCase:
        """Provide propose match use case."""
        return ProposeMatchUseCase(match_service=match_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_match_use_case(
        self, match_service: MatchService, meetup_service: MeetupService
    ) -> RespondToMatchUseCase:
        """Provide respond to match use case."""
        return RespondToMatchUseCase(
            match_service=match_service, meetup_service=meetup_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_matches_use_case(
        self, match_service: MatchService
    ) -> ListMatchesUseCase:
        """Provide list matches use case."""
        return ListMatchesUseCase(match_service=match_service)

    # Meetup use cases
    @provide(scope=Scope.REQUEST)
    def get_confirm_meetup_start_use_case(
        self, meetup_service: MeetupService
    ) -> ConfirmMeetupStartUseCase:
        """Provide confirm meetup start use case."""
        return ConfirmMeetupStartUseCase(meetup_service=meetup_service)

    @provide(scope=Scope.REQUEST)
    def get_confirm_meetup_end_use_case(
        self, meetup_service: MeetupService
    ) -> ConfirmMeetupEndUseCase:
        """Provide confirm meetup end use case."""
        return ConfirmMeetupEndUseCase(meetup_service=meetup_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_meetup_use_case(
        self, meetup_service: MeetupService
    ) -> CancelMeetupUseCase:
        """Provide cancel meetup use case."""
        return CancelMeetupUseCase(meetup_service=meetup_service)

    @provide(scope=Scope.REQUEST)
    def get_get_meetup_use_case(self, meetup_service: MeetupService) -> GetMeetupUseCase:
        """Provide get meetup use case."""
        return GetMeetupUseCase(meetup_service=meetup_service)

    # Review use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_review_use_case(
        self, review_service: ReviewService
    ) -> SubmitReviewUseCase:
        """Provide submit review use case."""
        return SubmitReviewUseCase(review_service=review_service)

    @provide(scope=Scope.REQUEST)
    def get_get_average_rating_use_case(
        self, review_service: ReviewService, user_service: UserService
    ) -> GetAverageRatingUseCase:
        """Provide get average rating use case."""
        return GetAverageRatingUseCase(
            review_service=review_service, user_service=user_service
        )
