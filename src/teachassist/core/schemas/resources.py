"""
Resource Library Schemas

Pydantic models for resource requests and responses.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from teachassist.core.validation import format_file_size

ResourceType = Literal["document", "link", "folder"]


class ResourceCreate(BaseModel):
    """Add-link / add-entry dialog (uploads use multipart form instead)."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    type: ResourceType = "link"
    url: str | None = Field(None, max_length=2048)

    @model_validator(mode="after")
    def require_url_for_links(self) -> "ResourceCreate":
        if self.type == "link" and not (self.url and self.url.strip()):
            raise ValueError("URL is required for link resources")
        return self


class ResourceSchema(BaseModel):
    """Full resource for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str
    type: ResourceType
    url: str | None
    file_path: str | None
    file_type: str | None
    file_size: int | None
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_label(self) -> str | None:
        """Human-readable file size."""
        return format_file_size(self.file_size) if self.file_size is not None else None
