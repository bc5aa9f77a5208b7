"""
Influencer Network Backend: Health Check Route
===============================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Runs SELECT 1 against the database.

Status levels:
    healthy:   database reachable (HTTP 200)
    degraded:  database unreachable (HTTP 503, stop routing traffic)

Served at both /health and /api/health; neither is rate limited or logged
by the access log.
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from influencer_network import __version__
from influencer_network.database import engine
from influencer_network.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


async def check_database() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check():
    database_ok = await check_database()
    payload = HealthResponse(
        status="healthy" if database_ok else "degraded",
        version=__version__,
        database="connected" if database_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if database_ok:
        return payload
    return JSONResponse(status_code=503, content=payload.model_dump(mode="json", by_alias=True))
