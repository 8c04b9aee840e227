"""
Liveness and readiness endpoints.
"""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from career_tracker.db.pool import db_health_check

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "career-tracker"}


@router.get("/readyz")
async def readyz():
    """Readiness check against the database pool."""
    t0 = time.time()
    db_health = await db_health_check()
    is_healthy = bool(db_health.get("healthy", False))

    checks = {
        "database": {
            "ok": is_healthy,
            "latency_ms": round((time.time() - t0) * 1000, 1),
        }
    }
    if "pool_stats" in db_health:
        checks["database"]["pool_stats"] = db_health["pool_stats"]
    if not is_healthy:
        checks["database"]["error"] = db_health.get("error", "Database unhealthy")

    body = {"overall_ok": is_healthy, "checks": checks}
    return JSONResponse(status_code=200 if is_healthy else 503, content=body)
