"""
Quiz Store

Persistence for generated quizzes. Quizzes are written once and never edited.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.cache import QUIZZES, list_cache
from teachassist.core.errors import NotFoundError, StoreError
from teachassist.core.models import Quiz
from teachassist.core.schemas import QuizQuestion, QuizSummary

logger = logging.getLogger(__name__)


async def save_quiz(
    db: AsyncSession,
    user_id: UUID | None,
    *,
    topic: str,
    difficulty: str,
    questions: Sequence[QuizQuestion],
) -> Quiz | None:
    """Insert a quiz for ``user_id``.

    Raises:
        StoreError: If the insert fails
    """
    if user_id is None:
        return None

    quiz = Quiz(
        user_id=user_id,
        topic=topic,
        difficulty=difficulty,
        questions=[q.model_dump(by_alias=True) for q in questions],
    )

    try:
        db.add(quiz)
        await db.commit()
        await db.refresh(quiz)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to save quiz for user {user_id}: {e}")
        raise StoreError("Failed to save quiz") from e

    await list_cache.invalidate(QUIZZES, user_id)
    return quiz


async def list_quizzes(db: AsyncSession, user_id: UUID | None) -> list[QuizSummary]:
    """The user's quizzes, newest first."""
    if user_id is None:
        return []

    cached = await list_cache.get(QUIZZES, user_id, "all", QuizSummary)
    if cached is not None:
        return cached

    try:
        result = await db.execute(
            select(Quiz).where(Quiz.user_id == user_id).order_by(Quiz.created_at.desc())
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to load quizzes for user {user_id}: {e}")
        raise StoreError("Failed to load quizzes") from e

    summaries = [
        QuizSummary(
            id=quiz.id,
            topic=quiz.topic,
            difficulty=quiz.difficulty,  # type: ignore[arg-type]
            question_count=len(quiz.questions or []),
            created_at=quiz.created_at,
        )
        for quiz in result.scalars().all()
    ]

    await list_cache.set(QUIZZES, user_id, "all", QuizSummary, summaries)
    return summaries


async def get_quiz(db: AsyncSession, user_id: UUID | None, quiz_id: UUID) -> Quiz | None:
    """Fetch one owned quiz (None if missing or not owned)."""
    if user_id is None:
        return None

    try:
        result = await db.execute(select(Quiz).where(Quiz.id == quiz_id, Quiz.user_id == user_id))
    except SQLAlchemyError as e:
        logger.error(f"Failed to load quiz {quiz_id}: {e}")
        raise StoreError("Failed to load quiz") from e

    return result.scalar_one_or_none()


async def delete_quiz(db: AsyncSession, user_id: UUID | None, quiz_id: UUID) -> bool:
    """Delete an owned quiz.

    Raises:
        NotFoundError: Quiz missing or owned by another user
        StoreError: If the delete fails
    """
    if user_id is None:
        return False

    quiz = await get_quiz(db, user_id, quiz_id)
    if quiz is None:
        raise NotFoundError(f"Quiz not found with ID: {quiz_id}")

    try:
        await db.delete(quiz)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to delete quiz {quiz_id}: {e}")
        raise StoreError("Failed to delete quiz") from e

    await list_cache.invalidate(QUIZZES, user_id)
    return True
