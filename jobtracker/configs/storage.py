"""
Document storage configuration.

Settings for the S3 bucket holding uploaded application documents,
file limits and signed URL expiry bounds.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for S3 document bucket operations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_DOCUMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="jobtracker-dev-documents",
        description="S3 bucket for uploaded documents",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible stores (MinIO, LocalStack)",
    )
    max_file_size: int = Field(
        default=50 * 1024 * 1024,
        description="Maximum upload size in bytes (default 50MB)",
    )
    presigned_url_expiry: int = Field(
        default=3600,
        description="Signed URL expiry in seconds (default 1 hour)",
    )
    min_presigned_url_expiry: int = Field(default=300, description="Lower bound for signed URL expiry")
    max_presigned_url_expiry: int = Field(default=86400, description="Upper bound for signed URL expiry")
