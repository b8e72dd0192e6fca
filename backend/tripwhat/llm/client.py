"""LLM completion client with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
Provides a deterministic stub when no key is present so every consumer
(intent detection, place-name extraction) takes its rule-based path.
"""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from backend.tripwhat.config import Settings

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Text-in, text-out language model capability."""

    async def complete(self, prompt: str, *, system: str | None = None) -> str:
        """Return the model's completion for ``prompt``.

        Args:
            prompt: User-turn content
            system: Optional system instructions

        Returns:
            Raw completion text (may be empty)
        """
        ...


class DeterministicStubClient:
    """Stub client for running without an API key (and for tests)."""

    async def complete(self, prompt: str, *, system: str | None = None) -> str:
        return ""


class OpenAICompletionClient:
    """OpenAI-backed completion client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            temperature: Sampling temperature; low values keep classification consistent
            max_tokens: Completion length cap
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(self, prompt: str, *, system: str | None = None) -> str:
        """Call chat completions; network and API errors propagate to the caller."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        content = response.choices[0].message.content or ""
        if not content.strip():
            logger.warning("OpenAI returned empty response")
        return content


def get_llm_client(settings: Settings) -> CompletionClient:
    """Factory function to get appropriate LLM client based on config.

    Returns:
        OpenAICompletionClient if API key is configured, DeterministicStubClient otherwise
    """
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for completions")
        return OpenAICompletionClient(
            api_key=api_key.get_secret_value(),
            model=settings.openai_model,
            temperature=settings.intent_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    logger.warning("No OpenAI API key configured, using deterministic stub client")
    return DeterministicStubClient()
