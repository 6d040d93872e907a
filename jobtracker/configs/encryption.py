"""
Token encryption configuration.

Dependencies: pydantic_settings
System role: Key material for encrypting OAuth tokens at rest
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EncryptionSettings(BaseSettings):
    """AES-256-GCM key settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ENCRYPTION_",
        case_sensitive=False,
        extra="ignore",
    )

    key: str = Field(
        default="",
        description="64 hex characters (32 bytes) used as the AES-256 key",
    )
