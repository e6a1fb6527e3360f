"""
Quiz Generator

Drives one generation run through its states:

    idle → validating_key → requesting → parsing → persisting → success

Any failure puts the generator back in ``idle`` with ``error`` set and the
exception propagates. A failed save does not fail the run: the quiz is still
returned, flagged as not persisted.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from teachassist.ai.client import AIClient
from teachassist.ai.prompts import build_quiz_messages
from teachassist.config import settings
from teachassist.core.errors import StoreError
from teachassist.core.schemas import QuizGenerateRequest, QuizGenerationResponse
from teachassist.quizzes.document import render_documents
from teachassist.quizzes.parser import parse_quiz_response
from teachassist.quizzes.store import save_quiz

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

NOT_SAVED_WARNING = "Quiz generated but could not be saved to your library."


class GenerationState(str, Enum):
    IDLE = "idle"
    VALIDATING_KEY = "validating_key"
    REQUESTING = "requesting"
    PARSING = "parsing"
    PERSISTING = "persisting"
    SUCCESS = "success"


class QuizGenerator:
    """One quiz generation workflow bound to a database session and LLM client."""

    def __init__(self, db: AsyncSession, ai_client: AIClient):
        self.db = db
        self.ai_client = ai_client
        self.state = GenerationState.IDLE
        self.error: str | None = None

    def _transition(self, state: GenerationState) -> None:
        logger.debug(f"Quiz generation {self.state.value} -> {state.value}")
        self.state = state

    async def generate(
        self, user_id: UUID | None, request: QuizGenerateRequest
    ) -> QuizGenerationResponse:
        """Run a full generation.

        Args:
            user_id: Owner for the saved quiz (None → quiz is not saved)
            request: Validated generator form

        Returns:
            Questions, renderings and persistence outcome

        Raises:
            AIError: Credential, quota, network, provider or format failure
        """
        self.error = None
        try:
            self._transition(GenerationState.VALIDATING_KEY)
            await self.ai_client.verify_credentials()

            self._transition(GenerationState.REQUESTING)
            system, messages = build_quiz_messages(
                topic=request.topic,
                num_questions=request.num_questions,
                difficulty=request.difficulty,
                additional_instructions=request.additional_instructions,
            )
            text = await self.ai_client.generate_completion(
                system=system, messages=messages, temperature=settings.OPENAI_TEMPERATURE
            )

            self._transition(GenerationState.PARSING)
            questions = parse_quiz_response(text)
        except Exception as e:
            self._fail(getattr(e, "message", None) or str(e))
            raise

        self._transition(GenerationState.PERSISTING)
        quiz_id = None
        warning = None
        try:
            quiz = await save_quiz(
                self.db,
                user_id,
                topic=request.topic,
                difficulty=request.difficulty,
                questions=questions,
            )
        except StoreError as e:
            logger.warning(f"Quiz for {user_id} generated but not saved: {e.message}")
            quiz = None
        if quiz is not None:
            quiz_id = quiz.id
        else:
            warning = NOT_SAVED_WARNING

        documents = render_documents(
            topic=request.topic,
            difficulty=request.difficulty,
            questions=questions,
            include_header=request.include_header,
            include_footer=request.include_footer,
        )

        self._transition(GenerationState.SUCCESS)
        logger.info(
            f"Generated {len(questions)} {request.difficulty} questions on '{request.topic}'"
            f" for user {user_id}"
        )
        return QuizGenerationResponse(
            quiz_id=quiz_id,
            persisted=quiz_id is not None,
            warning=warning,
            topic=request.topic,
            difficulty=request.difficulty,
            questions=questions,
            documents=documents,
        )

    def _fail(self, message: str) -> None:
        logger.warning(f"Quiz generation failed during {self.state.value}: {message}")
        self.error = message
        self.state = GenerationState.IDLE
