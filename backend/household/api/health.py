"""Health check endpoints.

Accessible without authentication so orchestrators can probe the service.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel

from household.core import Database, get_database, settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    version: str


class HealthDetailResponse(HealthResponse):
    """Readiness response including storage and background job state."""

    database: str
    blacklist_sweeper: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get(
    "/health/detail",
    response_model=HealthDetailResponse,
    responses={
        status.HTTP_200_OK: {"description": "Detailed health information"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Service is unhealthy"},
    },
)
async def health_detail(
    request: Request,
    response: Response,
    database: Database = Depends(get_database),
) -> HealthDetailResponse:
    """
    Detailed health check endpoint.

    Returns 503 if the database is unavailable.
    """
    db_healthy = await database.check_connection()
    if not db_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    sweeper = getattr(request.app.state, "sweeper", None)
    return HealthDetailResponse(
        status="healthy" if db_healthy else "unhealthy",
        version=settings.app_version,
        database="connected" if db_healthy else "disconnected",
        blacklist_sweeper="running" if sweeper is not None and sweeper.running else "stopped",
    )
