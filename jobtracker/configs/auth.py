"""
Session authentication configuration.

Signing secret and cookie parameters for the session JWT issued after
Google sign-in.

Dependencies: pydantic_settings
System role: Session cookie configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Session cookie and JWT settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign session tokens",
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    session_cookie_name: str = Field(default="jobtracker_session")
    state_cookie_name: str = Field(default="jobtracker_oauth_state")
    session_max_age: int = Field(
        default=60 * 60 * 24 * 7,
        description="Session lifetime in seconds (default 7 days)",
    )
    cookie_secure: bool = Field(default=False, description="Mark cookies Secure (HTTPS only)")
