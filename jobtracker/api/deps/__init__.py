"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_application_service,
    get_auth_service,
    get_current_user,
    get_dashboard_service,
    get_document_service,
    get_gmail_service,
    get_oauth_client,
    get_optional_user,
    get_outreach_service,
    get_s3_document_client,
    get_service_cache,
    get_settings_dependency,
    get_token_cipher,
    get_user_settings_service,
)

__all__ = [
    "get_application_service",
    "get_auth_service",
    "get_current_user",
    "get_dashboard_service",
    "get_document_service",
    "get_gmail_service",
    "get_oauth_client",
    "get_optional_user",
    "get_outreach_service",
    "get_s3_document_client",
    "get_service_cache",
    "get_settings_dependency",
    "get_token_cipher",
    "get_user_settings_service",
]
