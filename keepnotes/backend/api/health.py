"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from keepnotes.backend.core.logging import get_logger
from keepnotes.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    from keepnotes.backend.core.config import get_app_config
    from keepnotes.backend.core.database import get_session_factory

    timeout = get_app_config().application.timeouts.database

    try:
        start = utc_now()
        async with asyncio.timeout(timeout):
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {"status": "healthy", "latency_ms": latency_ms}

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready", response_model=None)
async def readiness_check() -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 200 when the database answers, 503 otherwise.
    """
    database = await check_database()
    body = {
        "status": database["status"],
        "checks": {"database": database},
        "timestamp": utc_now().isoformat(),
    }
    if database["status"] != "healthy":
        return JSONResponse(status_code=503, content=body)
    return body
