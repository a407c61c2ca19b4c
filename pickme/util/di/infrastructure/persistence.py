"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pickme.config import DatabaseSettings, Settings
from pickme.domain.repository import (
    GeoIndex,
    MatchRepository,
    MeetupRepository,
    PickRequestRepository,
    ReviewRepository,
    TransactionRunner,
    UserRepository,
)
from pickme.persistence.database import create_engine, create_session_factory
from pickme.persistence.repository import (
    PostgresGeoIndex,
    PostgresMatchRepository,
    PostgresMeetupRepository,
    PostgresPickRequestRepository,
    PostgresReviewRepository,
    PostgresUserRepository,
)
from pickme.persistence.transaction import PostgresTransactionRunner
from pickme.util.di.base import ProviderBase
from pickme.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction_runner(
        self, session: AsyncSession, database: DatabaseSettings
    ) -> TransactionRunner:
        """Provide savepoint-based transaction runner."""
        return PostgresTransactionRunner(
            session,
            max_retries=database.max_retries,
            backoff_seconds=database.retry_backoff_seconds,
        )

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_pick_request_repository(
        self, session: AsyncSession
    ) -> PickRequestRepository:
        """Provide PickRequest repository."""
        return PostgresPickRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_match_repository(self, session: AsyncSession) -> MatchRepository:
        """Provide Match repository."""
        return PostgresMatchRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_meetup_repository(self, session: AsyncSession) -> MeetupRepository:
        """Provide Meetup repository."""
        return PostgresMeetupRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_review_repository(self, session: AsyncSession) -> ReviewRepository:
        """Provide Review repository."""
        return PostgresReviewRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_geo_index(self, session: AsyncSession) -> GeoIndex:
        """Provide proximity lookup over pick requests."""
        return PostgresGeoIndex(session)
