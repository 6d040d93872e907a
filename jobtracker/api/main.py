"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, middleware and exception
handlers, and configures the uvicorn server.

Dependencies: fastapi, jobtracker.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtracker.api import api_router
from jobtracker.api.deps.dependencies import get_service_cache
from jobtracker.api.error_handling import register_exception_handlers
from jobtracker.configs import get_settings
from jobtracker.observability.logger import configure_logging
from jobtracker.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.s3_client
    _ = cache.oauth_client
    if not settings.google.is_configured:
        logger.warning("Google OAuth credentials missing; sign-in and Gmail are unavailable")
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="JobTracker API",
        description="Job application tracking with documents, outreach and Gmail status detection",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Cookies are sent cross-origin, so origins must be explicit
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.google.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability middleware; correlation is outermost so request logs carry the ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers under /api
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "jobtracker.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
