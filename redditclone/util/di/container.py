"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from redditclone.config import Settings
from redditclone.util.di import PROVIDERS, Component, get_provider


def mocked_components(settings: Settings) -> set[Component]:
    """Components whose substitute implementation the settings select."""
    if settings.persistence.backend == "memory":
        return {"persistence"}
    return set()


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the application container.

    Args:
        settings: Application settings (loaded from environment if omitted)

    Returns:
        Configured DI container
    """
    settings = settings or Settings()
    mocked = mocked_components(settings)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        use_mock = component_name in mocked if component_name else False
        provider_instances.append(get_provider(base, use_mock=use_mock)())

    # Include FastapiProvider for proper integration with FastAPI
    return make_async_container(
        *provider_instances,
        FastapiProvider(),
        context={Settings: settings},
    )


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
