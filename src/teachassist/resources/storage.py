"""
Storage Service

Object storage for uploaded resource files. Supports the local filesystem
(development, tests) and S3-compatible buckets (production). Keys have the
form ``<user_id>/<random>.<ext>``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import secrets
from pathlib import Path
from typing import Any
from uuid import UUID

import aiofiles
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from teachassist.config import settings
from teachassist.core.errors import StorageError

logger = logging.getLogger(__name__)


def build_storage_key(user_id: UUID, extension: str) -> str:
    """New object key inside the user's folder."""
    name = secrets.token_hex(8)
    return f"{user_id}/{name}.{extension}" if extension else f"{user_id}/{name}"


class StorageService:
    """Unified storage over the local filesystem or an S3 bucket."""

    def __init__(
        self,
        *,
        backend: str = "local",
        local_base_path: Path | str = "storage/resources",
        bucket_name: str = "teachassist-resources-local",
        public_base_url: str = "",
        s3_client: Any | None = None,
    ):
        self.backend = backend
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")
        self.local_base_path = Path(local_base_path)

        if backend == "s3":
            self.s3_client = s3_client or self._init_s3_client()
            logger.info(f"Storage Service initialized with S3 storage (bucket: {bucket_name})")
        else:
            self.s3_client = None
            self.local_base_path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Storage Service initialized with LOCAL storage ({self.local_base_path})")

    @classmethod
    def from_settings(cls) -> StorageService:
        return cls(
            backend=settings.STORAGE_BACKEND,
            local_base_path=settings.LOCAL_STORAGE_PATH,
            bucket_name=settings.S3_RESOURCES_BUCKET,
            public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
        )

    @staticmethod
    def _init_s3_client() -> Any:
        return boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL or None,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            region_name=settings.AWS_REGION,
            config=Config(signature_version="s3v4"),
        )

    @property
    def is_s3(self) -> bool:
        return self.backend == "s3"

    def public_url(self, key: str) -> str:
        """Public URL recorded on the resource row."""
        return f"{self.public_base_url}/{self.bucket_name}/{key}"

    def _local_path(self, key: str) -> Path:
        root = self.local_base_path.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            raise StorageError(f"Invalid storage key: {key}")
        return path

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key``.

        Raises:
            StorageError: If the write fails, or a local key already exists
        """
        if self.is_s3:
            try:
                await asyncio.to_thread(
                    self.s3_client.put_object,
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                )
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Failed to upload to S3: {e}")
                raise StorageError(f"Failed to upload file: {e}") from e
        else:
            path = self._local_path(key)
            if path.exists():
                raise StorageError(f"Failed to upload file: {key} already exists")
            path.parent.mkdir(parents=True, exist_ok=True)
            try:
                async with aiofiles.open(path, "wb") as f:
                    await f.write(data)
            except OSError as e:
                logger.error(f"Failed to save to local storage: {e}")
                raise StorageError(f"Failed to upload file: {e}") from e

        logger.debug(f"Stored object {key} ({len(data)} bytes)")
        return key

    async def download(self, key: str) -> bytes:
        """Read the object stored under ``key``.

        Raises:
            StorageError: Missing object or read failure
        """
        if self.is_s3:
            try:
                response = await asyncio.to_thread(
                    self.s3_client.get_object, Bucket=self.bucket_name, Key=key
                )
                return await asyncio.to_thread(response["Body"].read)
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Failed to get from S3: {e}")
                raise StorageError("Failed to download file") from e

        path = self._local_path(key)
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error(f"Failed to read from local storage: {e}")
            raise StorageError("Failed to download file") from e

    async def remove(self, key: str) -> None:
        """Delete the object under ``key`` (missing objects are ignored).

        Raises:
            StorageError: If the delete fails
        """
        if self.is_s3:
            try:
                await asyncio.to_thread(
                    self.s3_client.delete_object, Bucket=self.bucket_name, Key=key
                )
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Failed to delete from S3: {e}")
                raise StorageError("Failed to delete file") from e
        else:
            path = self._local_path(key)
            try:
                if path.exists():
                    await asyncio.to_thread(os.remove, path)
            except OSError as e:
                logger.error(f"Failed to delete from local storage: {e}")
                raise StorageError("Failed to delete file") from e

        logger.debug(f"Deleted object {key}")


_storage_service: StorageService | None = None


def get_storage_service() -> StorageService:
    """Get the global storage service instance."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService.from_settings()
    return _storage_service
