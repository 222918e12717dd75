"""
Unit Test Fixtures.

Fixtures for unit tests - the record store and authenticator are faked.
Unit tests should be fast and isolated, never touching real databases.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from todo_tracker.core.exceptions import AuthenticationError
from todo_tracker.repositories.todo import TodoRepository
from todo_tracker.services.todo import TodoService


@pytest.fixture
def mock_repo() -> AsyncMock:
    """
    Mock record store.

    Usage:
        def test_get(mock_repo):
            mock_repo.find_by_id.return_value = TodoRecord(id="1", note="x", is_done=False)
    """
    repo = AsyncMock(spec=TodoRepository)
    repo.find_by_id.return_value = None
    repo.find_all.return_value = []
    return repo


@pytest.fixture
def mock_service() -> AsyncMock:
    """Mock TodoService, for asserting what the API layer asks of it."""
    return AsyncMock(spec=TodoService)


class StubAuthenticator:
    """Accepts exactly one token and counts every call."""

    VALID_TOKEN = "valid-token"

    def __init__(self) -> None:
        self.calls = 0

    async def authenticate(self, token: str) -> dict[str, Any]:
        self.calls += 1
        if token != self.VALID_TOKEN:
            raise AuthenticationError("Invalid or expired token")
        return {"sub": "auth0|unit-user"}


@pytest.fixture
def stub_authenticator() -> StubAuthenticator:
    return StubAuthenticator()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {StubAuthenticator.VALID_TOKEN}"}
