"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, consumption, preferences, sleep

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    consumption.router, prefix="/consumption", tags=["Consumption"]
)
api_router.include_router(
    sleep.router, prefix="/sleep", tags=["Sleep check-ins"]
)
api_router.include_router(
    preferences.router, prefix="/preferences", tags=["Preferences"]
)
api_router.include_router(
    analytics.router, prefix="/analytics", tags=["Analytics"]
)
