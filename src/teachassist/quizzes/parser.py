"""
Quiz Response Parser

Turns raw model output into validated question records. A single malformed
item rejects the whole batch.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from teachassist.ai.client import AIResponseFormatError
from teachassist.core.schemas import QuizQuestion

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)

_REQUIRED_TEXT_FIELDS = ("question", "correctAnswer", "explanation")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model sometimes wraps JSON in."""
    return _FENCE.sub("", text).strip()


def _is_valid_question(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    for field in _REQUIRED_TEXT_FIELDS:
        value = item.get(field)
        if not isinstance(value, str) or not value.strip():
            return False
    return isinstance(item.get("options"), list)


def parse_quiz_response(text: str) -> list[QuizQuestion]:
    """Parse model output into questions.

    Args:
        text: Raw completion text (JSON array, possibly fenced)

    Returns:
        Questions in model order

    Raises:
        AIResponseFormatError: Not JSON, not an array, or any item malformed
    """
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        logger.warning(f"Quiz response is not valid JSON: {e}")
        raise AIResponseFormatError() from e

    if not isinstance(data, list):
        logger.warning(f"Quiz response is a {type(data).__name__}, expected array")
        raise AIResponseFormatError()

    for index, item in enumerate(data):
        if not _is_valid_question(item):
            logger.warning(f"Quiz response item {index} is malformed")
            raise AIResponseFormatError()

    return [
        QuizQuestion(
            question=item["question"],
            options=[str(option) for option in item["options"]],
            correct_answer=item["correctAnswer"],
            explanation=item["explanation"],
        )
        for item in data
    ]
