"""
Health Check Endpoints.

- /health: Liveness check (process running)
- /health/ready: Readiness check (database and Redis reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from admin_shell.core.cache import get_redis
from admin_shell.core.database import get_session_factory
from admin_shell.core.logging import get_logger
from admin_shell.core.utils import utc_now
from admin_shell.pipeline import public, raw_response
from admin_shell.pipeline.route import PipelineRoute

router = APIRouter(route_class=PipelineRoute)
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database() -> dict[str, Any]:
    """Run SELECT 1 and report latency."""
    try:
        start = utc_now()
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
        return {"status": "healthy", "latency_ms": latency_ms}
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


async def check_redis() -> dict[str, Any]:
    """PING the cache and report latency."""
    try:
        start = utc_now()
        await get_redis().ping()
        latency_ms = int((utc_now() - start).total_seconds() * 1000)
        return {"status": "healthy", "latency_ms": latency_ms}
    except Exception as e:
        logger.warning("Redis health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
@public
@raw_response
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
@public
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Checks the database and Redis in parallel; 503 if either is unhealthy.
    """
    db_result: dict[str, Any] = {"status": "error", "error": "check did not run"}
    redis_result: dict[str, Any] = {"status": "error", "error": "check did not run"}

    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            async with asyncio.TaskGroup() as tg:
                db_task = tg.create_task(check_database())
                redis_task = tg.create_task(check_redis())
            db_result = db_task.result()
            redis_result = redis_task.result()
    except* Exception as eg:
        for exc in eg.exceptions:
            logger.warning("Health check task failed", extra={"error": str(exc)})

    checks = {"database": db_result, "redis": redis_result}
    unhealthy = [name for name, check in checks.items() if check.get("status") != "healthy"]

    if unhealthy:
        logger.warning("Readiness check failed", extra={"unhealthy": unhealthy})
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "checks": checks},
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
