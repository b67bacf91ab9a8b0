"""
FastAPI application entry point for the dashboard backend.

This module creates the FastAPI app instance, owns the lifetime of the shared
connection pool and registers all routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard.config import settings
from dashboard.db.client import close_pool, init_pool
from dashboard.routes.customers import router as customers_router
from dashboard.routes.dashboard import router as dashboard_router
from dashboard.routes.health import router as health_router
from dashboard.routes.invoices import router as invoices_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the connection pool at startup and close it at shutdown."""
    await init_pool()
    try:
        yield
    finally:
        await close_pool()


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ORIGINS as configured
    - Anything else: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = [origin.strip() for origin in settings.CORS_ORIGINS if origin.strip()]
        logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Dashboard API",
    description="Data-access backend for the invoices dashboard",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (e.g. exception objects) from validation errors."""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log detailed validation errors for debugging 422 responses."""
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc),
        }
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(invoices_router)
app.include_router(customers_router)

logger.info("FastAPI app initialized successfully")
