"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    applications_router,
    auth_router,
    dashboard_router,
    documents_router,
    gmail_router,
    health_router,
    outreach_router,
    settings_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(applications_router)
api_router.include_router(documents_router)
api_router.include_router(outreach_router)
api_router.include_router(settings_router)
api_router.include_router(dashboard_router)
api_router.include_router(gmail_router)

__all__ = ["api_router"]
