"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from redditclone.config import Settings
from redditclone.interface.api.routes import health, posts
from redditclone.util.di.container import create_container, setup_di
from redditclone.util.observability import instrument_fastapi


def create_app(
    settings: Settings | None = None,
    container: AsyncContainer | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Application settings (loaded from environment if omitted)
        container: DI container (built from settings if omitted)
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="redditclone API",
        description="Posts, votes and comments for a reddit-style link aggregator",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container(settings))

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)

    return app_instance
