"""
API v1 main router
Combines all v1 endpoint routers
"""

from fastapi import APIRouter

from streakboard.api.v1.endpoints import health, organizations, tracks

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(organizations.router, prefix="/organizations", tags=["Organizations"])
api_router.include_router(tracks.router, prefix="/tracks", tags=["Tracks"])
