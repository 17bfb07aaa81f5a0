"""Observability configuration using Logfire.

Logfire provides structured logging and tracing on top of OpenTelemetry,
with integrations for FastAPI and SQLAlchemy.

Usage:
    import logfire

    # Structured logging
    logfire.info("Post created", post_id=str(post.id), category=post.category.value)

    # Manual spans for store and service operations
    with logfire.span("post_service.upvote", post_id=str(post_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from redditclone.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN environment variable to enable cloud sending
    - If token is present, logs will be sent to Logfire cloud by default
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": "redditclone",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        backend=settings.persistence.backend,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Traces every request with its duration, status and route. The
    Authorization header carries the caller's token, so headers are not
    captured.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
