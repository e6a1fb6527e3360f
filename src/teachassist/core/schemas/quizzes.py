"""
Quiz Schemas

Request, question and response models for quiz generation and export.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]
QuestionCount = Literal[5, 10, 15, 20]
DocumentKind = Literal["questions", "answers"]
DocumentVersion = Literal["preview", "student", "answers"]


class QuizQuestion(BaseModel):
    """One multiple-choice question as returned by the model."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str]
    correct_answer: str = Field(..., alias="correctAnswer")
    explanation: str


class QuizGenerateRequest(BaseModel):
    """Quiz generator form."""

    topic: str = Field(..., max_length=300)
    num_questions: QuestionCount = 5
    difficulty: Difficulty = "medium"
    additional_instructions: str | None = Field(None, max_length=2000)
    include_header: bool = True
    include_footer: bool = True

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please enter a topic")
        return v.strip()


class QuizDocuments(BaseModel):
    """The three read-only renderings of a quiz."""

    preview: str
    student: str
    answer_key: str
    questions_filename: str
    answers_filename: str


class QuizSchema(BaseModel):
    """Stored quiz."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user_id: UUID
    topic: str
    difficulty: Difficulty
    questions: list[QuizQuestion]
    created_at: datetime


class QuizSummary(BaseModel):
    """List entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    topic: str
    difficulty: Difficulty
    question_count: int
    created_at: datetime


class QuizGenerationResponse(BaseModel):
    """Result of a generation run."""

    quiz_id: UUID | None
    persisted: bool
    warning: str | None = None
    topic: str
    difficulty: Difficulty
    questions: list[QuizQuestion]
    documents: QuizDocuments
    message: str = "Quiz generated successfully!"


class CredentialStatus(BaseModel):
    """Preflight credential check result."""

    ok: bool
    detail: str | None = None
