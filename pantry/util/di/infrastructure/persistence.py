"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pantry.config import Settings
from pantry.domain.repository import (
    AuditRepository,
    CommentRepository,
    RatingRepository,
    RecipeRepository,
    UnitOfWork,
    UserRepository,
)
from pantry.persistence.database import create_engine, create_session_factory
from pantry.persistence.repository import (
    PostgresAuditRepository,
    PostgresCommentRepository,
    PostgresRatingRepository,
    PostgresRecipeRepository,
    PostgresUnitOfWork,
    PostgresUserRepository,
)
from pantry.util.di.base import ProviderBase
from pantry.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

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

        Commits are issued by the unit of work. Anything left open when the
        request ends, including after an exception, is rolled back.
        """
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    logfire.warn("Session closed with open transaction")
                    await session.rollback()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work over the request session."""
        return PostgresUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_recipe_repository(self, session: AsyncSession) -> RecipeRepository:
        """Provide Recipe repository."""
        return PostgresRecipeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_rating_repository(self, session: AsyncSession) -> RatingRepository:
        """Provide Rating repository."""
        return PostgresRatingRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_repository(self, session: AsyncSession) -> AuditRepository:
        """Provide Audit repository."""
        return PostgresAuditRepository(session)
