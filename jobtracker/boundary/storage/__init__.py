"""Object storage clients."""

from jobtracker.boundary.storage.s3_client import S3DocumentClient

__all__ = ["S3DocumentClient"]
