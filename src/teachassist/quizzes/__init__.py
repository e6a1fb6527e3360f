"""
Quizzes

LLM-backed quiz generation, parsing, rendering and storage.
"""

from .document import quiz_filename, render_documents, render_quiz_document
from .generator import GenerationState, QuizGenerator
from .parser import parse_quiz_response

__all__ = [
    "GenerationState",
    "QuizGenerator",
    "parse_quiz_response",
    "quiz_filename",
    "render_documents",
    "render_quiz_document",
]
