"""Health check endpoints for liveness and readiness checks."""
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from studygroup_service.api.dependencies import AppSettings
from studygroup_service.infrastructure.database.connection import db

router = APIRouter()


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str = Field("alive", description="Liveness status")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str = Field(..., description="Readiness status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@router.get("/health", response_model=LivenessResponse)
async def liveness(settings: AppSettings) -> LivenessResponse:
    """The process is up and serving requests."""
    return LivenessResponse(version=settings.app_version)


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(response: Response) -> ReadinessResponse:
    """
    Ready when the database answers ``SELECT 1``.

    Answers 503 when the database is unconfigured or unreachable.
    """
    if not db.is_connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", database="not_configured")

    if not await db.health_check():
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", database="unhealthy")

    return ReadinessResponse(status="ready", database="healthy")
