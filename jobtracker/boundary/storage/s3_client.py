"""
S3 client for document bucket operations.

Uploads, downloads, deletes and signed download URLs for application
documents. botocore errors are translated into domain exceptions.

Dependencies: boto3, botocore
System role: Object storage adapter for document blobs
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from jobtracker.core.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3DocumentClient:
    """S3 client for the documents bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        s3_client=None,
    ) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            endpoint_url: Custom endpoint for S3-compatible stores
            s3_client: Pre-built boto3 client (tests)
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = s3_client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_file(self, s3_key: str, body: bytes, content_type: str) -> None:
        """
        Store a document.

        Args:
            s3_key: S3 object key (path in bucket)
            body: File bytes
            content_type: MIME type recorded on the object

        Raises:
            StorageError: If the upload fails
        """
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=s3_key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed", extra={"s3_key": s3_key, "error": str(e)})
            raise StorageError("Failed to upload file", key=s3_key) from e

        logger.info("Uploaded document to S3", extra={"s3_key": s3_key, "size": len(body)})

    def download_file(self, s3_key: str) -> tuple[bytes, str | None, int]:
        """
        Read a document.

        Args:
            s3_key: S3 object key

        Returns:
            tuple[bytes, str | None, int]: (content, content_type, size)

        Raises:
            NotFoundError: If no object exists at the key
            StorageError: If the download fails
        """
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=s3_key)
            content = response["Body"].read()
        except ClientError as e:
            if _error_code(e) in _MISSING_KEY_CODES:
                raise NotFoundError("File", s3_key) from e
            logger.error("S3 download failed", extra={"s3_key": s3_key, "error": str(e)})
            raise StorageError("Failed to download file", key=s3_key) from e
        except BotoCoreError as e:
            raise StorageError("Failed to download file", key=s3_key) from e

        return content, response.get("ContentType"), response.get("ContentLength", len(content))

    def delete_file(self, s3_key: str) -> None:
        """
        Delete a document. Deleting a missing key is not an error in S3.

        Args:
            s3_key: S3 object key

        Raises:
            StorageError: If the delete call fails
        """
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=s3_key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError("Failed to delete file", key=s3_key) from e

    def generate_presigned_download_url(
        self,
        s3_key: str,
        expires_in: int = 3600,
        filename: str | None = None,
        inline: bool = True,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading/viewing an S3 object.

        Args:
            s3_key: S3 object key (path in bucket)
            expires_in: URL expiry in seconds (default 1 hour)
            filename: Name offered to the browser when downloading
            inline: Display in the browser instead of forcing a download

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            StorageError: If presigned URL generation fails
        """
        params = {"Bucket": self._bucket, "Key": s3_key}
        if filename:
            disposition = "inline" if inline else "attachment"
            params["ResponseContentDisposition"] = f'{disposition}; filename="{filename}"'

        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params=params,
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError("Failed to generate signed URL", key=s3_key) from e

        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
