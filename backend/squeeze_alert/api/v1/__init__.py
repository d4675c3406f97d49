"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from squeeze_alert.api.v1.endpoints import squeeze

router = APIRouter()

# Include all endpoint routers
router.include_router(squeeze.router, prefix="/squeeze", tags=["Squeeze Indicator"])
