"""
Health check route for the local search server.

This endpoint is PUBLIC and provides a simple status check for local
development and deployment verification.
"""

from fastapi import APIRouter

from search_backend.schemas.health import HealthResponse
from search_backend.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Public health check endpoint. Always returns {"status": "ok"}."""
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
