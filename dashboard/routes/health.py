"""
Health check route for the dashboard backend.

This endpoint is PUBLIC and does not touch the database; it is a liveness
check for the container and for local development.
"""

from fastapi import APIRouter

from dashboard.schemas.health import HealthResponse
from dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns a simple status indicator for monitoring.",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "dashboard-backend"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
