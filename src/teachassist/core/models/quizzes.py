"""
Quiz Model

Generated multiple-choice quizzes. Rows are written once after a successful
generation and never updated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from .users import UserProfile

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Quiz(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Quiz with its ordered question records."""

    __tablename__ = "quizzes"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    topic: Mapped[str] = mapped_column(String(300), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(10), default="medium")
    questions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        comment="[{question, options[4], correctAnswer, explanation}]",
    )

    owner: Mapped[UserProfile] = relationship(back_populates="quizzes")
