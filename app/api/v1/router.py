"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import scores, training

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    scores.router, prefix="/scores", tags=["Recovery scores"]
)
api_router.include_router(
    training.router, prefix="/training", tags=["Training load"]
)
