"""
Test suite for S3DocumentClient.

Uses a MagicMock boto3 client to verify request parameters and the
translation of botocore errors into domain exceptions.

System role: Verification of object storage adapter
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from jobtracker.boundary.storage.s3_client import S3DocumentClient
from jobtracker.core.exceptions import NotFoundError, StorageError


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def boto_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def s3(boto_client: MagicMock) -> S3DocumentClient:
    return S3DocumentClient(bucket="jobtracker-docs", s3_client=boto_client)


class TestUpload:
    """Test suite for upload_file."""

    def test_should_put_object_with_content_type(self, s3, boto_client):
        s3.upload_file("u/a/cv.pdf", b"%PDF", "application/pdf")

        boto_client.put_object.assert_called_once_with(
            Bucket="jobtracker-docs",
            Key="u/a/cv.pdf",
            Body=b"%PDF",
            ContentType="application/pdf",
        )

    def test_client_error_should_raise_storage_error(self, s3, boto_client):
        boto_client.put_object.side_effect = _client_error("AccessDenied", "PutObject")

        with pytest.raises(StorageError) as exc_info:
            s3.upload_file("u/a/cv.pdf", b"%PDF", "application/pdf")

        assert exc_info.value.details["key"] == "u/a/cv.pdf"


class TestDownload:
    """Test suite for download_file."""

    def test_should_return_body_type_and_size(self, s3, boto_client):
        body = MagicMock()
        body.read.return_value = b"hello"
        boto_client.get_object.return_value = {
            "Body": body,
            "ContentType": "text/plain",
            "ContentLength": 5,
        }

        assert s3.download_file("k") == (b"hello", "text/plain", 5)

    def test_missing_key_should_raise_not_found(self, s3, boto_client):
        boto_client.get_object.side_effect = _client_error("NoSuchKey", "GetObject")

        with pytest.raises(NotFoundError):
            s3.download_file("gone")

    def test_other_errors_should_raise_storage_error(self, s3, boto_client):
        boto_client.get_object.side_effect = _client_error("InternalError", "GetObject")

        with pytest.raises(StorageError):
            s3.download_file("k")


class TestDelete:
    """Test suite for delete_file."""

    def test_should_delete_object(self, s3, boto_client):
        s3.delete_file("k")

        boto_client.delete_object.assert_called_once_with(Bucket="jobtracker-docs", Key="k")

    def test_failure_should_raise_storage_error(self, s3, boto_client):
        boto_client.delete_object.side_effect = _client_error("AccessDenied", "DeleteObject")

        with pytest.raises(StorageError):
            s3.delete_file("k")


class TestPresignedUrl:
    """Test suite for generate_presigned_download_url."""

    def test_should_set_attachment_disposition(self, s3, boto_client):
        boto_client.generate_presigned_url.return_value = "https://signed"
        before = datetime.now(timezone.utc)

        url, expires_at = s3.generate_presigned_download_url("k", 300, "cv.pdf", inline=False)

        assert url == "https://signed"
        params = boto_client.generate_presigned_url.call_args.kwargs["Params"]
        assert params["ResponseContentDisposition"] == 'attachment; filename="cv.pdf"'
        assert boto_client.generate_presigned_url.call_args.kwargs["ExpiresIn"] == 300
        assert 299 <= (expires_at - before).total_seconds() <= 301

    def test_without_filename_should_omit_disposition(self, s3, boto_client):
        boto_client.generate_presigned_url.return_value = "https://signed"

        s3.generate_presigned_download_url("k")

        params = boto_client.generate_presigned_url.call_args.kwargs["Params"]
        assert params == {"Bucket": "jobtracker-docs", "Key": "k"}
