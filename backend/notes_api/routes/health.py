"""
Notes API - Health Check Route
==============================

What:  Liveness/readiness probe for load balancers and container runtimes.
How:   Runs SELECT 1 against the database and reports uptime.
Who:   Mounted as HealthModule at /api/v1/health. Not part of the generated
       API documentation.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still answered with 200 so the
                 body can be inspected; probes should look at `status`)
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from notes_api import __version__
from notes_api.database import engine
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
