"""
FastAPI application with database pool lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from career_tracker.config import settings
from career_tracker.db.pool import db_pool
from career_tracker.features.scoring_engine import scoring_router
from career_tracker.infrastructure.observability.logging import (
    get_logger,
    log_request,
    setup_logging,
)
from career_tracker.routes import health

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool on startup and close it on shutdown."""
    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    try:
        await db_pool.initialize()
    except RuntimeError as e:
        logger.error("Failed to initialize services", error=str(e))
        raise

    yield

    logger.info("Application shutting down")
    try:
        await db_pool.close()
    except Exception as e:
        logger.error("Error closing database pool", error=str(e))


app = FastAPI(
    title="Career Tracker Scoring Engine",
    description="Composite scoring, benchmarks, response-time predictions and engagement",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(scoring_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return response
