"""
Health Check Endpoints.

Provides liveness and readiness checks. Not behind the bearer token gate.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (record store reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from todo_tracker.core.config import get_app_config
from todo_tracker.core.logging import get_logger
from todo_tracker.core.utils import elapsed_ms, utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(request: Request) -> dict[str, Any]:
    """
    Check database connectivity with a trivial query.

    Returns:
        Dict with status, latency, and optional error message
    """
    try:
        start = utc_now()
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "latency_ms": elapsed_ms(start),
        }

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy", "timestamp": utc_now().isoformat()}


@router.get("/health/ready", response_model=None)
async def readiness_check(request: Request) -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 200 if the record store answers within the configured timeout,
    503 otherwise.
    """
    timeout = get_app_config().application.timeouts.health_check

    try:
        db_result = await asyncio.wait_for(check_database(request), timeout=timeout)
    except asyncio.TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    checks = {"database": db_result}
    body = {
        "status": db_result["status"],
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

    if db_result["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        return JSONResponse(status_code=503, content=body)

    return body
