"""Test harness for unit and integration tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import httpx
import pytest_asyncio

from scribe.interface.api.app import create_app
from scribe.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_comment(unit_env):
            service = await unit_env.get(CommentService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_app_fixture():
    """Factory for a fixture yielding ``(client, container)`` for route tests.

    The app is wired to an all-mock container; requests go through
    httpx's ASGI transport, no server is started. Use the container to
    seed data or inspect the mock mail outbox.
    """

    @pytest_asyncio.fixture
    async def _app_environment():
        container = build_test_container()
        app = create_app(container=container)
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client, container

        await container.close()

    return _app_environment
