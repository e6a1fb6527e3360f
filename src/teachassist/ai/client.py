"""
LLM Client

Thin async wrapper over the OpenAI-compatible chat-completion API. Provider
failures are mapped onto a small error taxonomy whose messages are shown to
the teacher verbatim.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
import openai
from openai import AsyncOpenAI

from teachassist.config import settings
from teachassist.core.errors import TeachAssistError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "OpenAI API key not found. Please check your environment variables."
NETWORK_MESSAGE = "Failed to connect to OpenAI API. Please check your internet connection."
GENERIC_FAILURE_MESSAGE = "Failed to generate quiz"
QUOTA_REMEDIATION_STEPS = (
    "Visit the OpenAI dashboard and add a payment method",
    "Ensure your billing information is valid",
    "Check if you've exceeded your usage limits",
)


class AIError(TeachAssistError):
    """Base class for LLM failures."""

    status_code = 502
    code = "ai_error"


class AIConfigurationError(AIError):
    """Credential missing or rejected."""

    status_code = 503
    code = "ai_configuration_error"


class AIQuotaError(AIError):
    """Account has no usable billing/quota."""

    status_code = 402
    code = "ai_quota_error"

    def __init__(self, billing_url: str):
        super().__init__(
            "Your OpenAI API key needs to be set up with valid billing information. "
            f"Please visit {billing_url} to add a payment method."
        )
        self.billing_url = billing_url
        self.remediation = list(QUOTA_REMEDIATION_STEPS)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["remediation"] = self.remediation
        body["billing_url"] = self.billing_url
        return body


class AIResponseFormatError(AIError):
    """Model output could not be parsed into questions."""

    code = "ai_response_format_error"

    def __init__(
        self,
        message: str = "Failed to generate quiz. Please try again with a different topic or wording.",
    ):
        super().__init__(message)


class AINetworkError(AIError):
    """Provider unreachable."""

    status_code = 504
    code = "ai_network_error"

    def __init__(self, message: str = NETWORK_MESSAGE):
        super().__init__(message)


class AIProviderError(AIError):
    """Any other provider-side failure."""

    code = "ai_provider_error"


class AIClient:
    """Chat-completion client with a credential preflight."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str | None = None,
        model: str = "gpt-3.5-turbo",
        billing_url: str = "https://platform.openai.com/account/billing",
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize AI client.

        Args:
            api_key: Bearer credential (empty/None → AIConfigurationError on use)
            base_url: API base URL
            model: Chat model identifier
            billing_url: Link surfaced with quota errors
            http_client: Optional transport override
        """
        self.api_key = api_key or None
        self.base_url = base_url
        self.model = model
        self.billing_url = billing_url
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        if self.api_key is None:
            raise AIConfigurationError(MISSING_KEY_MESSAGE)
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def verify_credentials(self) -> None:
        """Check that the credential is present, accepted and funded.

        Raises:
            AIError: Mapped failure
        """
        try:
            await self.client.models.list()
        except openai.OpenAIError as e:
            raise self._map_error(e) from e
        logger.debug("LLM credential preflight passed")

    async def generate_completion(
        self,
        *,
        system: str,
        messages: Sequence[dict[str, str]],
        temperature: float = 0.7,
        model: str | None = None,
    ) -> str:
        """Request one chat completion.

        Args:
            system: System prompt
            messages: Conversation messages (user turns)
            temperature: Sampling temperature
            model: Override for the configured model

        Returns:
            Text of the first choice

        Raises:
            AIError: Mapped provider failure, or an empty completion
        """
        chat: list[dict[str, Any]] = [{"role": "system", "content": system}]
        chat.extend(messages)

        try:
            response = await self.client.chat.completions.create(
                model=model or self.model,
                messages=chat,  # type: ignore[arg-type]
                temperature=temperature,
            )
        except openai.OpenAIError as e:
            raise self._map_error(e) from e

        if not response.choices or not response.choices[0].message.content:
            logger.warning("LLM response had no content")
            raise AIResponseFormatError()

        return response.choices[0].message.content

    def _map_error(self, error: openai.OpenAIError) -> AIError:
        """Translate SDK exceptions into the user-facing taxonomy."""
        if isinstance(error, openai.AuthenticationError):
            logger.warning(f"LLM credential rejected: {error}")
            return AIConfigurationError(
                "Invalid OpenAI API key. Please check your environment variables."
            )

        if isinstance(error, openai.APIStatusError) and "insufficient_quota" in (
            getattr(error, "code", None),
            getattr(error, "type", None),
        ):
            logger.warning("LLM account has insufficient quota")
            return AIQuotaError(self.billing_url)

        if isinstance(error, openai.APIConnectionError):
            logger.error(f"LLM connection error: {error}")
            return AINetworkError()

        if isinstance(error, openai.APIStatusError):
            logger.error(f"LLM API error {error.status_code}: {error.message}")
            return AIProviderError(error.message or GENERIC_FAILURE_MESSAGE)

        logger.error(f"LLM client error: {error}")
        return AIProviderError(str(error) or GENERIC_FAILURE_MESSAGE)


def get_ai_client() -> AIClient:
    """Get configured AI client instance.

    Returns:
        AIClient built from settings
    """
    return AIClient(
        api_key=settings.OPENAI_API_KEY or None,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        billing_url=settings.OPENAI_BILLING_URL,
    )
