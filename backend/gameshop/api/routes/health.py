"""Health Probes: liveness and store readiness.

Invariants:
    - GET /api/v1/health/ answers 200 while the process runs, without touching the store
    - GET /api/v1/health/ready answers 503 when the store is uninitialized or unreachable
"""

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from gameshop.infrastructure import database

SERVICE_NAME = "gameshop-api"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    """Round-trip a trivial query through the store."""
    manager = database.db_manager
    started = time.perf_counter()
    reachable = manager is not None and await manager.health_check()
    if not reachable:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }
