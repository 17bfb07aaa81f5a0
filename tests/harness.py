"""Test harness for unit, integration and E2E tests.

Integration tests assume PostgreSQL is reachable at the configured
DATABASE__URL and skip otherwise.
"""

import pytest_asyncio

from redditclone.config import Settings
from redditclone.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards, so app-scoped state (the in-memory
      store, the engine) never leaks between tests

    Args:
        unmock: Components to use real implementations for
        settings: Settings placed in the container (test defaults if omitted)

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory persistence
        unit_env = create_env_fixture()

        # Integration tests - PostgreSQL persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env, alice):
            service = await unit_env.get(PostService)
            post = await service.create_post(alice, text_payload())
            assert post.score == 1
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
