"""
Resource Library Service

CRUD bridge for the resource library plus file upload and download through
object storage.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.cache import RESOURCES, list_cache
from teachassist.core.errors import NotFoundError, StorageError, StoreError
from teachassist.core.models import Resource
from teachassist.core.schemas import ResourceCreate, ResourceSchema
from teachassist.core.validation import file_extension, filename_stem, validate_upload
from teachassist.resources.storage import StorageService, build_storage_key

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class ResourceDownload:
    """File bytes with the name and type to send them under."""

    content: bytes
    filename: str
    content_type: str


def filter_resources(resources: Sequence[ResourceSchema], search: str | None) -> list[ResourceSchema]:
    """Case-insensitive substring match over title and description."""
    if not search or not search.strip():
        return list(resources)

    needle = search.strip().lower()
    return [
        r
        for r in resources
        if needle in r.title.lower() or needle in (r.description or "").lower()
    ]


async def list_resources(
    db: AsyncSession, user_id: UUID | None, *, search: str | None = None
) -> list[ResourceSchema]:
    """The user's resources, newest first, optionally filtered by ``search``."""
    if user_id is None:
        return []

    resources = await list_cache.get(RESOURCES, user_id, "all", ResourceSchema)
    if resources is None:
        try:
            result = await db.execute(
                select(Resource)
                .where(Resource.user_id == user_id)
                .order_by(Resource.created_at.desc())
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load resources for user {user_id}: {e}")
            raise StoreError("Failed to load resources") from e

        resources = [ResourceSchema.model_validate(row) for row in result.scalars().all()]
        await list_cache.set(RESOURCES, user_id, "all", ResourceSchema, resources)

    return filter_resources(resources, search)


async def get_resource(
    db: AsyncSession, user_id: UUID | None, resource_id: UUID
) -> Resource | None:
    """Fetch one owned resource (None if missing or not owned)."""
    if user_id is None:
        return None

    try:
        result = await db.execute(
            select(Resource).where(Resource.id == resource_id, Resource.user_id == user_id)
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to load resource {resource_id}: {e}")
        raise StoreError("Failed to load resource") from e

    return result.scalar_one_or_none()


async def _insert(db: AsyncSession, resource: Resource) -> Resource:
    try:
        db.add(resource)
        await db.commit()
        await db.refresh(resource)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to add resource for user {resource.user_id}: {e}")
        raise StoreError("Failed to add resource: could not save to your library") from e

    await list_cache.invalidate(RESOURCES, resource.user_id)
    logger.info(f"Resource {resource.id} ({resource.type}) added for user {resource.user_id}")
    return resource


async def create_resource(
    db: AsyncSession, user_id: UUID | None, data: ResourceCreate
) -> Resource | None:
    """Add a link, folder or file-less document entry."""
    if user_id is None:
        return None

    return await _insert(
        db,
        Resource(
            user_id=user_id,
            title=data.title,
            description=data.description,
            type=data.type,
            url=data.url,
        ),
    )


async def upload_resource(
    db: AsyncSession,
    storage: StorageService,
    user_id: UUID | None,
    *,
    filename: str,
    content_type: str | None,
    data: bytes,
    title: str | None = None,
    description: str = "",
) -> Resource | None:
    """Validate, store and record an uploaded document.

    Raises:
        ValidationError: File too large or of a disallowed type
        StorageError: Blob upload failed
        StoreError: Row insert failed (the uploaded blob is removed)
    """
    if user_id is None:
        return None

    validate_upload(content_type, len(data))

    key = build_storage_key(user_id, file_extension(filename))
    await storage.upload(key, data, content_type or DEFAULT_CONTENT_TYPE)

    resource = Resource(
        user_id=user_id,
        title=(title or "").strip() or filename_stem(filename),
        description=description,
        type="document",
        url=storage.public_url(key),
        file_path=key,
        file_type=content_type,
        file_size=len(data),
    )

    try:
        return await _insert(db, resource)
    except StoreError:
        try:
            await storage.remove(key)
        except StorageError:
            logger.error(f"Orphaned upload left in storage: {key}")
        raise


async def download_resource(
    db: AsyncSession, storage: StorageService, user_id: UUID | None, resource_id: UUID
) -> ResourceDownload | None:
    """Fetch an owned resource's file.

    Raises:
        NotFoundError: Resource missing, not owned, or without a file
        StorageError: Blob could not be read
    """
    if user_id is None:
        return None

    resource = await get_resource(db, user_id, resource_id)
    if resource is None:
        raise NotFoundError(f"Resource not found with ID: {resource_id}")
    if not resource.file_path:
        raise NotFoundError("No file available for download")

    content = await storage.download(resource.file_path)
    extension = file_extension(resource.file_path)
    filename = f"{resource.title}.{extension}" if extension else resource.title

    return ResourceDownload(
        content=content,
        filename=filename,
        content_type=resource.file_type or DEFAULT_CONTENT_TYPE,
    )


async def delete_resource(
    db: AsyncSession, storage: StorageService, user_id: UUID | None, resource_id: UUID
) -> bool:
    """Delete an owned resource: its blob first, then the row.

    Raises:
        NotFoundError: Resource missing or owned by another user
        StorageError: Blob delete failed (row left untouched)
        StoreError: Row delete failed
    """
    if user_id is None:
        return False

    resource = await get_resource(db, user_id, resource_id)
    if resource is None:
        raise NotFoundError(f"Resource not found with ID: {resource_id}")

    if resource.file_path:
        await storage.remove(resource.file_path)

    try:
        await db.delete(resource)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete resource {resource_id}: {e}")
        raise StoreError("Failed to delete resource") from e

    await list_cache.invalidate(RESOURCES, user_id)
    return True
