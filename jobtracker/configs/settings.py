"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from jobtracker.configs.auth import AuthSettings
from jobtracker.configs.base import BaseSettings
from jobtracker.configs.database import DatabaseSettings
from jobtracker.configs.encryption import EncryptionSettings
from jobtracker.configs.google import GoogleOAuthSettings
from jobtracker.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    google: GoogleOAuthSettings = GoogleOAuthSettings()
    auth: AuthSettings = AuthSettings()
    encryption: EncryptionSettings = EncryptionSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from jobtracker.configs import get_settings
        settings = get_settings()
    """
    return Settings()
