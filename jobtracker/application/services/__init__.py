"""Service orchestrators."""

from .application_service import ApplicationService
from .auth_service import AuthService
from .dashboard_service import DashboardService
from .document_service import DocumentService
from .gmail_service import GmailService
from .outreach_service import OutreachService
from .settings_service import SettingsService

__all__ = [
    "ApplicationService",
    "AuthService",
    "DashboardService",
    "DocumentService",
    "GmailService",
    "OutreachService",
    "SettingsService",
]
