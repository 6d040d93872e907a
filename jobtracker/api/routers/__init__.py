"""API routers."""

from .applications import router as applications_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .documents import router as documents_router
from .gmail import router as gmail_router
from .health import router as health_router
from .outreach import router as outreach_router
from .settings import router as settings_router

__all__ = [
    "applications_router",
    "auth_router",
    "dashboard_router",
    "documents_router",
    "gmail_router",
    "health_router",
    "outreach_router",
    "settings_router",
]
