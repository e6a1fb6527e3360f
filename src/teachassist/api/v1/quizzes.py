"""
Quiz Generator API Endpoints

Generate multiple-choice quizzes with the LLM, browse saved quizzes and
export them as plain-text question sheets and answer keys.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.ai.client import AIClient, AIError, get_ai_client
from teachassist.core.database import get_db
from teachassist.core.errors import AuthenticationRequired, NotFoundError
from teachassist.core.models import Quiz
from teachassist.core.schemas import (
    CredentialStatus,
    MessageResponse,
    QuizDocuments,
    QuizGenerateRequest,
    QuizGenerationResponse,
    QuizQuestion,
    QuizSchema,
    QuizSummary,
)
from teachassist.core.security import AuthContext, get_auth_context, user_id_of
from teachassist.core.validation import content_disposition
from teachassist.quizzes import store as quiz_store
from teachassist.quizzes.document import quiz_filename, render_documents, render_quiz_document
from teachassist.quizzes.generator import QuizGenerator

router = APIRouter()


async def _owned_quiz(db: AsyncSession, auth: AuthContext | None, quiz_id: UUID) -> Quiz:
    if auth is None:
        raise AuthenticationRequired()
    quiz = await quiz_store.get_quiz(db, auth.user_id, quiz_id)
    if quiz is None:
        raise NotFoundError(f"Quiz not found with ID: {quiz_id}")
    return quiz


def _questions(quiz: Quiz) -> list[QuizQuestion]:
    return [QuizQuestion.model_validate(q) for q in quiz.questions]


@router.post("/generate", response_model=QuizGenerationResponse)
async def generate_quiz(
    request: QuizGenerateRequest,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
) -> QuizGenerationResponse:
    """Generate, save and render a quiz."""
    if auth is None:
        raise AuthenticationRequired()

    generator = QuizGenerator(db, ai_client)
    return await generator.generate(auth.user_id, request)


@router.get("/credentials", response_model=CredentialStatus)
async def check_credentials(ai_client: AIClient = Depends(get_ai_client)) -> CredentialStatus:
    """Preflight check of the LLM credential."""
    try:
        await ai_client.verify_credentials()
    except AIError as e:
        return CredentialStatus(ok=False, detail=e.message)
    return CredentialStatus(ok=True)


@router.get("/", response_model=list[QuizSummary])
async def list_quizzes(
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> list[QuizSummary]:
    """The caller's saved quizzes, newest first."""
    return await quiz_store.list_quizzes(db, user_id_of(auth))


@router.get("/{quiz_id}", response_model=QuizSchema)
async def get_quiz(
    quiz_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> Quiz:
    """One saved quiz with its questions."""
    return await _owned_quiz(db, auth, quiz_id)


@router.get("/{quiz_id}/document", response_model=QuizDocuments)
async def get_quiz_documents(
    quiz_id: UUID,
    include_header: bool = True,
    include_footer: bool = True,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> QuizDocuments:
    """Preview, student version and answer key of a saved quiz."""
    quiz = await _owned_quiz(db, auth, quiz_id)
    return render_documents(
        topic=quiz.topic,
        difficulty=quiz.difficulty,
        questions=_questions(quiz),
        include_header=include_header,
        include_footer=include_footer,
    )


@router.get("/{quiz_id}/download", response_class=PlainTextResponse)
async def download_quiz(
    quiz_id: UUID,
    kind: Literal["questions", "answers"] = "questions",
    include_header: bool = True,
    include_footer: bool = True,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> PlainTextResponse:
    """Download the question sheet or the answer key as a text file."""
    quiz = await _owned_quiz(db, auth, quiz_id)
    document = render_quiz_document(
        topic=quiz.topic,
        difficulty=quiz.difficulty,
        questions=_questions(quiz),
        include_answers=kind == "answers",
        include_header=include_header,
        include_footer=include_footer,
    )
    return PlainTextResponse(
        content=document,
        headers={"Content-Disposition": content_disposition(quiz_filename(quiz.topic, kind))},
    )


@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(
    quiz_id: UUID,
    auth: AuthContext | None = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Delete a saved quiz."""
    if not await quiz_store.delete_quiz(db, user_id_of(auth), quiz_id):
        raise AuthenticationRequired()
    return MessageResponse(message="Quiz deleted successfully")
