"""
API v1 router aggregator.

This module aggregates all v1 API routes into a single router
that can be mounted at /api/v1 in the main application.

Routes included in v1:
    - /settings - Profile, tag and password settings for the current account

Routes NOT versioned (kept at root level):
    - /health/* - Health check endpoints
"""

from fastapi import APIRouter

from studygroup_service.api.routes import settings


router = APIRouter()

# Settings routes: /api/v1/settings/*
router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"]
)


__all__ = ["router"]
