"""
AI Services

LLM client and prompt construction for the quiz generator.
"""

from .client import (
    AIClient,
    AIConfigurationError,
    AIError,
    AINetworkError,
    AIProviderError,
    AIQuotaError,
    AIResponseFormatError,
    get_ai_client,
)
from .prompts import build_quiz_messages

__all__ = [
    "AIClient",
    "AIConfigurationError",
    "AIError",
    "AINetworkError",
    "AIProviderError",
    "AIQuotaError",
    "AIResponseFormatError",
    "get_ai_client",
    "build_quiz_messages",
]
