"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from pickme.config import AuthSettings, MatchingSettings, SafetySettings
from pickme.domain.repository import (
    GeoIndex,
    MatchRepository,
    MeetupRepository,
    PickRequestRepository,
    ReviewRepository,
    TransactionRunner,
    UserRepository,
)
from pickme.domain.service import (
    JWTService,
    MatchService,
    MeetupService,
    PickRequestService,
    ProximitySearchService,
    ReviewService,
    UserService,
    policy_from_name,
)
from pickme.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_pick_request_service(
        self,
        pick_request_repository: PickRequestRepository,
        user_service: UserService,
        transactions: TransactionRunner,
        matching: MatchingSettings,
    ) -> PickRequestService:
        """Provide pick request domain service."""
        return PickRequestService(
            pick_request_repository=pick_request_repository,
            user_service=user_service,
            transactions=transactions,
            ttl=timedelta(minutes=matching.pick_request_ttl_minutes),
        )

    @provide
    def get_meetup_service(
        self,
        meetup_repository: MeetupRepository,
        match_repository: MatchRepository,
        pick_request_service: PickRequestService,
        user_service: UserService,
        transactions: TransactionRunner,
    ) -> MeetupService:
        """Provide meetup domain service."""
        return MeetupService(
            meetup_repository=meetup_repository,
            match_repository=match_repository,
            pick_request_service=pick_request_service,
            user_service=user_service,
            transactions=transactions,
        )

    @provide
    def get_match_service(
        self,
        match_repository: MatchRepository,
        pick_request_service: PickRequestService,
        meetup_service: MeetupService,
        user_service: UserService,
        transactions: TransactionRunner,
    ) -> MatchService:
        """Provide match domain service."""
        return MatchService(
            match_repository=match_repository,
            pick_request_service=pick_request_service,
            meetup_service=meetup_service,
            user_service=user_service,
            transactions=transactions,
        )

    @provide
    def get_proximity_search_service(
        self,
        geo_index: GeoIndex,
        user_repository: UserRepository,
        matching: MatchingSettings,
    ) -> ProximitySearchService:
        """Provide proximity search domain service."""
        return ProximitySearchService(
            geo_index=geo_index,
            user_repository=user_repository,
            max_radius_meters=matching.max_search_radius_meters,
        )

    @provide
    def get_review_service(
        self,
        review_repository: ReviewRepository,
        meetup_repository: MeetupRepository,
        user_repository: UserRepository,
        transactions: TransactionRunner,
        safety: SafetySettings,
    ) -> ReviewService:
        """Provide review domain service."""
        return ReviewService(
            review_repository=review_repository,
            meetup_repository=meetup_repository,
            user_repository=user_repository,
            transactions=transactions,
            safety_policy=policy_from_name(safety.policy, safety.nudge_step),
        )
