"""
FastAPI application factory.

Creates the scoring API, wires logging from settings and mounts the v1
router.  Every endpoint is stateless: the request carries all the data
needed for one computation.
"""

from fastapi import FastAPI

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.instrumentation import configure_logging
from app.engine.load import DEFAULT_LOAD_CONFIG
from app.engine.readiness import DEFAULT_READINESS_CONFIG

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Sleep, readiness and training-load scores from raw biometrics.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "Scoring Engine API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "scoring-engine",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    """Project metadata and the engine defaults the API falls back to."""
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "readiness": {
            "baseline_days": settings.READINESS_BASELINE_DAYS,
            "min_baseline_days": settings.READINESS_MIN_BASELINE_DAYS,
            "neutral_score": DEFAULT_READINESS_CONFIG.neutral_score,
        },
        "load": {
            "acute_days": settings.ACWR_ACUTE_DAYS,
            "chronic_days": settings.ACWR_CHRONIC_DAYS,
            "consistency_weeks": DEFAULT_LOAD_CONFIG.consistency_weeks,
        },
    }
