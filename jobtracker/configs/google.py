"""
Google OAuth configuration.

Client credentials and endpoint URLs shared by the sign-in flow and the
Gmail read-only connection flow.

Dependencies: pydantic_settings
System role: OAuth provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoogleOAuthSettings(BaseSettings):
    """Google OAuth 2.0 client settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GOOGLE_",
        case_sensitive=False,
        extra="ignore",
    )

    client_id: str = Field(default="", description="OAuth client ID")
    client_secret: str = Field(default="", description="OAuth client secret")

    app_base_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL of this API, used to build callback URLs",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Frontend base URL that OAuth callbacks redirect back to",
    )

    authorize_url: str = Field(default="https://accounts.google.com/o/oauth2/v2/auth")
    token_url: str = Field(default="https://oauth2.googleapis.com/token")
    userinfo_url: str = Field(default="https://openidconnect.googleapis.com/v1/userinfo")
    revoke_url: str = Field(default="https://oauth2.googleapis.com/revoke")

    request_timeout: float = Field(default=10.0, description="HTTP timeout for OAuth calls in seconds")

    @property
    def is_configured(self) -> bool:
        """Check if client credentials are available."""
        return bool(self.client_id and self.client_secret)

    @property
    def login_redirect_uri(self) -> str:
        return f"{self.app_base_url.rstrip('/')}/api/auth/callback"

    @property
    def gmail_redirect_uri(self) -> str:
        return f"{self.app_base_url.rstrip('/')}/api/gmail/callback"
