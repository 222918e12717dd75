"""
Integration Test Fixtures.

Integration tests run the real stack: an in-memory SQLite record store and
a JwksAuthenticator verifying RS256 tokens against the in-process JWKS
endpoint from the root conftest.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_tracker.core.security import JwksAuthenticator
from todo_tracker.main import create_app


@pytest.fixture
async def client(
    db_session_factory: async_sessionmaker[AsyncSession],
    authenticator: JwksAuthenticator,
) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for the fully wired application.

    Usage:
        async def test_list(client, auth_headers):
            response = await client.get("/api/todos", headers=auth_headers)
    """
    app = create_app(session_factory=db_session_factory, authenticator=authenticator)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}
