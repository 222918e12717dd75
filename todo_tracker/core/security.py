"""
Security Utilities.

Bearer token verification against an external JSON Web Key Set.

The application depends only on the Authenticator protocol; JwksAuthenticator
is the production implementation and is built once at startup from
security.yaml.
"""

import asyncio
import time
from typing import Any, Protocol

import httpx
from jose import JWTError, jwt

from todo_tracker.core.config_schema import SecuritySchema
from todo_tracker.core.exceptions import AuthenticationError
from todo_tracker.core.logging import get_logger

logger = get_logger(__name__)


class Authenticator(Protocol):
    """Validates a bearer credential before a request is dispatched."""

    async def authenticate(self, token: str) -> dict[str, Any]:
        """
        Verify `token` and return its claims.

        Raises:
            AuthenticationError: If the token cannot be trusted
        """
        ...


class JwksAuthenticator:
    """
    Verifies signed JWTs with keys fetched from a JWKS endpoint.

    The key set is cached for `cache_seconds`. A token whose `kid` is not in
    the cached set triggers a refetch, which picks up rotated keys, but no
    more often than every `min_refresh_seconds`.
    """

    def __init__(
        self,
        jwks_url: str,
        algorithms: list[str],
        audience: str | None = None,
        issuer: str | None = None,
        cache_seconds: int = 3600,
        min_refresh_seconds: int = 30,
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.jwks_url = jwks_url
        self.algorithms = algorithms
        self.audience = audience
        self.issuer = issuer
        self.cache_seconds = cache_seconds
        self.min_refresh_seconds = min_refresh_seconds
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client
        self._jwks: dict[str, Any] | None = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    async def authenticate(self, token: str) -> dict[str, Any]:
        """Verify signature, expiry, audience and issuer of `token`."""
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            logger.warning("Malformed bearer token", extra={"error": str(e)})
            raise AuthenticationError("Invalid or expired token") from e

        key = await self._find_key(header.get("kid"))
        if key is None:
            logger.warning("No signing key for token", extra={"kid": header.get("kid")})
            raise AuthenticationError("Invalid or expired token")

        try:
            return jwt.decode(
                token,
                key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.warning("Token decode failed", extra={"error": str(e)})
            raise AuthenticationError("Invalid or expired token") from e

    async def _find_key(self, kid: str | None) -> dict[str, Any] | None:
        jwks = await self._get_jwks()
        key = _select_key(jwks, kid)
        if key is None and kid is not None:
            jwks = await self._get_jwks(force_refresh=True)
            key = _select_key(jwks, kid)
        return key

    def _age(self) -> float:
        return time.monotonic() - self._fetched_at

    def _is_fresh(self) -> bool:
        return self._jwks is not None and self._age() < self.cache_seconds

    def _may_refresh(self) -> bool:
        return self._jwks is None or self._age() >= self.min_refresh_seconds

    async def _get_jwks(self, force_refresh: bool = False) -> dict[str, Any]:
        if not force_refresh and self._is_fresh():
            return self._jwks

        async with self._lock:
            # Re-check: another request may have fetched while this one waited
            if force_refresh and not self._may_refresh():
                logger.debug("JWKS refresh skipped", extra={"age_seconds": self._age()})
                return self._jwks
            if not force_refresh and self._is_fresh():
                return self._jwks

            try:
                self._jwks = await self._fetch_jwks()
            except httpx.HTTPError as e:
                logger.error(
                    "Failed to fetch JWKS",
                    extra={"url": self.jwks_url, "error": str(e)},
                )
                raise AuthenticationError("Unable to verify token") from e

            self._fetched_at = time.monotonic()
            logger.debug(
                "JWKS fetched",
                extra={"url": self.jwks_url, "keys": len(self._jwks.get("keys", []))},
            )
            return self._jwks

    async def _fetch_jwks(self) -> dict[str, Any]:
        if self._http_client is not None:
            response = await self._http_client.get(self.jwks_url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(self.jwks_url)
        response.raise_for_status()
        return response.json()


def _select_key(jwks: dict[str, Any], kid: str | None) -> dict[str, Any] | None:
    """Pick the key matching `kid`; a single-key set also serves tokens without one."""
    keys = jwks.get("keys", [])
    if kid is None:
        return keys[0] if len(keys) == 1 else None
    for key in keys:
        if key.get("kid") == kid:
            return key
    return None


def build_authenticator(
    security: SecuritySchema,
    http_client: httpx.AsyncClient | None = None,
) -> JwksAuthenticator:
    """Create the JWKS authenticator described by security.yaml."""
    return JwksAuthenticator(
        jwks_url=security.jwks.url,
        algorithms=security.jwt.algorithms,
        audience=security.jwt.audience,
        issuer=security.jwt.issuer,
        cache_seconds=security.jwks.cache_seconds,
        min_refresh_seconds=security.jwks.min_refresh_seconds,
        timeout_seconds=security.jwks.timeout_seconds,
        http_client=http_client,
    )
