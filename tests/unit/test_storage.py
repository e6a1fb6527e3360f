"""
Tests for the Storage Service

Local backend against a temp directory; S3 backend against a mocked boto3
client.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

from teachassist.core.errors import StorageError
from teachassist.resources.storage import StorageService, build_storage_key


@pytest.fixture
def local_storage(tmp_path) -> StorageService:
    return StorageService(
        backend="local",
        local_base_path=tmp_path / "blobs",
        bucket_name="resources",
        public_base_url="http://files.test/public/",
    )


def test_build_storage_key():
    """Test keys live in the user's folder and keep the extension."""
    user_id = uuid4()

    key = build_storage_key(user_id, "pdf")

    assert key.startswith(f"{user_id}/")
    assert key.endswith(".pdf")
    assert build_storage_key(user_id, "pdf") != key


class TestLocalStorage:
    """Test the filesystem backend."""

    async def test_upload_download_remove(self, local_storage: StorageService):
        key = f"{uuid4()}/lesson.txt"

        await local_storage.upload(key, b"Lesson one", "text/plain")
        assert await local_storage.download(key) == b"Lesson one"

        await local_storage.remove(key)
        with pytest.raises(StorageError):
            await local_storage.download(key)

    async def test_upload_refuses_overwrite(self, local_storage: StorageService):
        key = f"{uuid4()}/lesson.txt"
        await local_storage.upload(key, b"first", "text/plain")

        with pytest.raises(StorageError):
            await local_storage.upload(key, b"second", "text/plain")

        assert await local_storage.download(key) == b"first"

    async def test_remove_missing_is_noop(self, local_storage: StorageService):
        await local_storage.remove(f"{uuid4()}/missing.pdf")

    async def test_key_cannot_escape_root(self, local_storage: StorageService):
        with pytest.raises(StorageError):
            await local_storage.upload("../outside.txt", b"x", "text/plain")

    def test_public_url(self, local_storage: StorageService):
        assert local_storage.public_url("u/a.pdf") == "http://files.test/public/resources/u/a.pdf"


class TestS3Storage:
    """Test the S3 backend with a mocked client."""

    @pytest.fixture
    def s3_client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def s3_storage(self, s3_client: MagicMock) -> StorageService:
        return StorageService(backend="s3", bucket_name="resources", s3_client=s3_client)

    async def test_upload(self, s3_storage: StorageService, s3_client: MagicMock):
        await s3_storage.upload("u/a.pdf", b"%PDF", "application/pdf")

        s3_client.put_object.assert_called_once_with(
            Bucket="resources", Key="u/a.pdf", Body=b"%PDF", ContentType="application/pdf"
        )

    async def test_download(self, s3_storage: StorageService, s3_client: MagicMock):
        body = MagicMock()
        body.read.return_value = b"%PDF"
        s3_client.get_object.return_value = {"Body": body}

        assert await s3_storage.download("u/a.pdf") == b"%PDF"

    async def test_download_failure(self, s3_storage: StorageService, s3_client: MagicMock):
        s3_client.get_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject"
        )

        with pytest.raises(StorageError) as exc_info:
            await s3_storage.download("u/a.pdf")

        assert exc_info.value.message == "Failed to download file"

    async def test_remove(self, s3_storage: StorageService, s3_client: MagicMock):
        await s3_storage.remove("u/a.pdf")

        s3_client.delete_object.assert_called_once_with(Bucket="resources", Key="u/a.pdf")
