"""
FastAPI application entry point for local development.

Exposes the serverless search handler over HTTP so the frontend can be
developed against it without deploying. Production traffic goes through
``search_backend.handler.handler`` on the hosting platform.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from search_backend.config import settings
from search_backend.routes.health import router as health_router
from search_backend.routes.search import router as search_router
from search_backend.utils.logging import configure_logging, get_logger

# Configure logging
configure_logging(settings.LOG_LEVEL)

logger = get_logger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (empty means none)
    - Anything else: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Grounded Product Search",
    description="Gemini + Google Search product recommendations for the storefront search box",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(search_router)

logger.info("FastAPI app initialized successfully")
