"""
Resource Library API Endpoints

Links, folders and uploaded teaching documents.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.config import settings
from teachassist.core.database import get_db
from teachassist.core.errors import AuthenticationRequired
from teachassist.core.models import Resource
from teachassist.core.schemas import MessageResponse, ResourceCreate, ResourceSchema
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.core.validation import content_disposition, validate_upload
from teachassist.resources import service as resource_service
from teachassist.resources.storage import StorageService, get_storage_service

router = APIRouter()


@router.get("/", response_model=list[ResourceSchema])
async def list_resources(
    search: str | None = None,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> list[ResourceSchema]:
    """List the caller's resources, newest first, optionally filtered."""
    return await resource_service.list_resources(db, user_id_of(auth), search=search)


@router.post("/", response_model=ResourceSchema, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_data: ResourceCreate,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> Resource:
    """Add a link or folder entry."""
    resource = await resource_service.create_resource(db, user_id_of(auth), resource_data)
    if resource is None:
        raise AuthenticationRequired()
    return resource


@router.post("/upload", response_model=ResourceSchema, status_code=status.HTTP_201_CREATED)
async def upload_resource(
    file: UploadFile = File(...),
    title: str | None = Form(None),
    description: str = Form(""),
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> Resource:
    """Upload a document (PDF, Word, Excel, PowerPoint or text, up to 10MB)."""
    if auth is None:
        raise AuthenticationRequired()

    # Reject on the reported size before buffering; never read past the limit
    if file.size is not None:
        validate_upload(file.content_type, file.size)
    data = await file.read(settings.max_upload_bytes + 1)
    resource = await resource_service.upload_resource(
        db,
        storage,
        auth.user_id,
        filename=file.filename or "upload",
        content_type=file.content_type,
        data=data,
        title=title,
        description=description,
    )
    if resource is None:
        raise AuthenticationRequired()
    return resource


@router.get("/{resource_id}/download", response_class=Response)
async def download_resource(
    resource_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> Response:
    """Download a resource's file as an attachment named ``<title>.<ext>``."""
    download = await resource_service.download_resource(db, storage, user_id_of(auth), resource_id)
    if download is None:
        raise AuthenticationRequired()

    return Response(
        content=download.content,
        media_type=download.content_type,
        headers={"Content-Disposition": content_disposition(download.filename)},
    )


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> MessageResponse:
    """Delete a resource and its stored file."""
    if not await resource_service.delete_resource(db, storage, user_id_of(auth), resource_id):
        raise AuthenticationRequired()
    return MessageResponse(message="Resource deleted successfully")
