"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from redditclone.config import Settings
from redditclone.domain.repository import PostRepository
from redditclone.persistence.database import create_engine, create_session_factory
from redditclone.persistence.repository import (
    InMemoryPostRepository,
    PostgresPostRepository,
)
from redditclone.util.di.base import ProviderBase
from redditclone.util.observability import instrument_sqlalchemy


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
        # Instrument SQLAlchemy for observability
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

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)


class InMemoryPersistenceProvider(PersistenceProvider):
    """In-process persistence, selected with ``PERSISTENCE__BACKEND=memory``.

    Also the default for test containers. The store is APP-scoped: every
    request of one container shares it, and it lives as long as the
    container does.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        logfire.info("Using in-memory post store")
        return InMemoryPostRepository()
