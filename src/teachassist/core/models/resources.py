"""
Resource Library Model

Links, folders and uploaded documents. Uploaded documents point at a blob in
object storage via ``file_path``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .users import UserProfile

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

RESOURCE_TYPES = ("document", "link", "folder")


class Resource(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A teaching resource in the user's library."""

    __tablename__ = "resources"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(String(20), default="document")

    url: Mapped[str | None] = mapped_column(
        String(2048), nullable=True, comment="External link or public object-storage URL"
    )
    file_path: Mapped[str | None] = mapped_column(
        String(512), nullable=True, comment="Object-storage key: <user_id>/<name>.<ext>"
    )
    file_type: Mapped[str | None] = mapped_column(String(200), nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    owner: Mapped[UserProfile] = relationship(back_populates="resources")
