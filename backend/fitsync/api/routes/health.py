"""Health & Readiness Probes — root banner, liveness and readiness endpoints.

Invariants:
    - GET / and GET /api/health/ always return 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from fitsync.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "FitSync Backend API is running!"


@router.get("/api/health/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "fitsync-api",
        "version": "1.0.0",
    }


@router.get("/api/health/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
