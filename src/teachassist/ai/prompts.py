"""
Quiz Prompts

Builds the chat messages sent to the model for quiz generation.
"""

from __future__ import annotations

QUIZ_SYSTEM_PROMPT = "You are an experienced teacher creating educational quiz questions."

QUIZ_FORMAT_INSTRUCTIONS = (
    "Format the response as a JSON array with each question object having: "
    "question, options (array of 4 choices), correctAnswer (matching one of the options "
    "exactly), and explanation. Make sure the questions are challenging, educational, "
    "and appropriate for classroom use."
)


def build_quiz_prompt(
    *,
    topic: str,
    num_questions: int,
    difficulty: str,
    additional_instructions: str | None = None,
) -> str:
    """User prompt for one quiz request."""
    parts = [
        f'Generate {num_questions} multiple-choice questions about "{topic}" '
        f"at {difficulty} difficulty level."
    ]
    if additional_instructions and additional_instructions.strip():
        parts.append(f"Additional instructions: {additional_instructions.strip()}")
    parts.append(QUIZ_FORMAT_INSTRUCTIONS)
    return "\n\n".join(parts)


def build_quiz_messages(
    *,
    topic: str,
    num_questions: int,
    difficulty: str,
    additional_instructions: str | None = None,
) -> tuple[str, list[dict[str, str]]]:
    """System prompt and user messages for a quiz request.

    Returns:
        (system, messages)
    """
    prompt = build_quiz_prompt(
        topic=topic,
        num_questions=num_questions,
        difficulty=difficulty,
        additional_instructions=additional_instructions,
    )
    return QUIZ_SYSTEM_PROMPT, [{"role": "user", "content": prompt}]
