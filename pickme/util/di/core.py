"""Core DI providers (non-mockable)."""

import logfire
from dishka import Scope, provide

from pickme.config import (
    AuthSettings,
    DatabaseSettings,
    MatchingSettings,
    SafetySettings,
    Settings,
)
from pickme.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded once per container from environment variables and the
    .env file. Each section is exposed on its own so services depend only on
    the knobs they read.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        settings = Settings()
        logfire.info(
            "Settings loaded",
            environment=settings.environment,
            pick_request_ttl_minutes=settings.matching.pick_request_ttl_minutes,
            safety_policy=settings.safety.policy,
        )
        return settings

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide
    def provide_matching_settings(self, settings: Settings) -> MatchingSettings:
        return settings.matching

    @provide
    def provide_safety_settings(self, settings: Settings) -> SafetySettings:
        return settings.safety
