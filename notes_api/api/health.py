"""
Health Check Endpoints.

/health answers as long as the process is up. /health/ready also
round-trips a query to the notes database and answers 503 when that
fails, so orchestrators stop routing traffic to the instance.
"""

import time
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from notes_api.core.database import get_engine
from notes_api.core.logging import get_logger
from notes_api.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """Run SELECT 1 and report status with latency or the error text."""
    started = time.perf_counter()
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "latency_ms": int((time.perf_counter() - started) * 1000),
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready", responses={503: {"description": "Database unreachable"}})
async def readiness_check() -> JSONResponse:
    database = await check_database()
    healthy = database["status"] == "healthy"
    if not healthy:
        logger.warning("Readiness check failed", extra={"database": database})

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": database["status"],
            "checks": {"database": database},
            "timestamp": utc_now().isoformat(),
        },
    )
