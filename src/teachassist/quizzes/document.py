"""
Quiz Document Rendering

Plain-text quiz sheets: a preview, a student version without answers and an
answer key. Output is deterministic for a given quiz.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from teachassist.core.schemas import QuizDocuments, QuizQuestion
from teachassist.core.validation import sanitize_filename

HEAVY_RULE = "═" * 50
LIGHT_RULE = "─" * 40
OPTION_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def option_letter(index: int) -> str:
    """A, B, C, ... for a zero-based option index."""
    return OPTION_LETTERS[index] if index < len(OPTION_LETTERS) else str(index + 1)


def render_quiz_document(
    *,
    topic: str,
    difficulty: str,
    questions: Sequence[QuizQuestion],
    include_answers: bool,
    include_header: bool = True,
    include_footer: bool = True,
) -> str:
    """Render one quiz sheet.

    Args:
        topic: Quiz topic
        difficulty: easy / medium / hard
        questions: Ordered questions
        include_answers: Add correct answer and explanation under each question
        include_header: Add the title block
        include_footer: Add the closing block

    Returns:
        Document text, lines joined with ``\\n``
    """
    lines: list[str] = []

    if include_header:
        lines.extend(
            [
                HEAVY_RULE,
                " " * 20 + "QUIZ",
                HEAVY_RULE,
                f"Topic: {topic}",
                f"Difficulty Level: {difficulty.capitalize()}",
                f"Total Questions: {len(questions)}",
                HEAVY_RULE,
                "",
            ]
        )

    for number, question in enumerate(questions, start=1):
        lines.append(f"Question {number}:")
        lines.append(question.question)
        lines.append("")
        for index, option in enumerate(question.options):
            lines.append(f"  {option_letter(index)}. {option}")

        if include_answers:
            lines.extend(
                [
                    "",
                    LIGHT_RULE,
                    f"Correct Answer: {question.correct_answer}",
                    "",
                    "Explanation:",
                    question.explanation,
                    LIGHT_RULE,
                ]
            )

        lines.append("\n")

    if include_footer:
        lines.extend(
            [
                HEAVY_RULE,
                "End of Answer Key" if include_answers else "Good luck!",
                HEAVY_RULE,
            ]
        )

    return "\n".join(lines)


def quiz_filename(topic: str, kind: Literal["questions", "answers"]) -> str:
    """Download filename: ``<topic>_questions.txt`` / ``<topic>_answers.txt``."""
    return f"{sanitize_filename(topic)}_{kind}.txt"


def render_documents(
    *,
    topic: str,
    difficulty: str,
    questions: Sequence[QuizQuestion],
    include_header: bool = True,
    include_footer: bool = True,
) -> QuizDocuments:
    """All three renderings plus their download filenames."""
    common = {
        "topic": topic,
        "difficulty": difficulty,
        "questions": questions,
        "include_header": include_header,
        "include_footer": include_footer,
    }
    answer_key = render_quiz_document(include_answers=True, **common)  # type: ignore[arg-type]
    return QuizDocuments(
        preview=answer_key,
        student=render_quiz_document(include_answers=False, **common),  # type: ignore[arg-type]
        answer_key=answer_key,
        questions_filename=quiz_filename(topic, "questions"),
        answers_filename=quiz_filename(topic, "answers"),
    )
