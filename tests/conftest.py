"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Every test gets a fresh in-memory SQLite database (aiosqlite) with the
    schema created, so no test can see another's rows.

Token Fixtures:
    A throwaway RSA key pair is generated once per session. The public half
    is published as a JWKS document and the private half signs test tokens.
"""

import time
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from todo_tracker.core.database import create_session_factory
from todo_tracker.core.security import JwksAuthenticator
from todo_tracker.models.base import Base
from todo_tracker.models.todo import TodoRecord  # noqa: F401  registers the table

TEST_KID = "test-key-1"
TEST_ISSUER = "https://issuer.test/"
TEST_AUDIENCE = "https://todo-tracker.test/api"
TEST_JWKS_URL = "https://issuer.test/.well-known/jwks.json"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine, built like the app's."""
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Usage:
        async def test_save(db_session: AsyncSession):
            repo = TodoRepository(db_session)
            record = await repo.save(TodoRecord(note="x", is_done=False))
            assert record.id is not None
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Token Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def rsa_private_pem() -> str:
    """PEM-encoded RSA private key used to sign test tokens."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def jwks_document(rsa_private_pem: str) -> dict[str, Any]:
    """JWKS document publishing the public half of the test key."""
    public_jwk = jwk.construct(rsa_private_pem, algorithm="RS256").public_key().to_dict()
    public_jwk.update({"kid": TEST_KID, "use": "sig"})
    return {"keys": [public_jwk]}


@pytest.fixture
def make_token(rsa_private_pem: str) -> Callable[..., str]:
    """
    Factory for signed RS256 tokens.

    Usage:
        token = make_token()                     # valid for a minute
        token = make_token(expires_in=-120)      # already expired
        token = make_token(aud="someone-else")   # override any claim
    """

    def _make(kid: str = TEST_KID, expires_in: int = 60, **claims: Any) -> str:
        now = int(time.time())
        payload = {
            "sub": "auth0|test-user",
            "iss": TEST_ISSUER,
            "aud": TEST_AUDIENCE,
            "iat": now,
            "exp": now + expires_in,
            **claims,
        }
        return jwt.encode(payload, rsa_private_pem, algorithm="RS256", headers={"kid": kid})

    return _make


# =============================================================================
# Authenticator Fixtures
# =============================================================================


class JwksServer:
    """
    In-process stand-in for the identity provider's JWKS endpoint.

    Counts requests and can be switched to fail, so tests can observe
    caching and outage behaviour.
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self.document = document
        self.requests = 0
        self.available = True

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        if not self.available:
            return httpx.Response(503, json={"error": "unavailable"})
        if request.url != httpx.URL(TEST_JWKS_URL):
            return httpx.Response(404)
        return httpx.Response(200, json=self.document)


@pytest.fixture
def jwks_server(jwks_document: dict[str, Any]) -> JwksServer:
    return JwksServer(jwks_document)


@pytest.fixture
async def authenticator(jwks_server: JwksServer) -> AsyncGenerator[JwksAuthenticator, None]:
    """Real JwksAuthenticator whose HTTP client talks to `jwks_server`."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(jwks_server.handle))
    yield JwksAuthenticator(
        jwks_url=TEST_JWKS_URL,
        algorithms=["RS256"],
        audience=TEST_AUDIENCE,
        issuer=TEST_ISSUER,
        cache_seconds=3600,
        min_refresh_seconds=30,
        http_client=http_client,
    )
    await http_client.aclose()
