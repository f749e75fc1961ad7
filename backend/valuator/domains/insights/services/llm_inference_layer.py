"""
LLM Inference Layer

Thin client for the external text generation service (any OpenAI-compatible
chat completion endpoint). Prompt in, text out; every failure surfaces as a
GenerationException.
"""

import asyncio
import logging
from typing import Optional

import openai

from valuator.config import get_settings
from valuator.shared.exceptions import APIKeyMissingException, GenerationException

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """Chat completion client configured explicitly at construction."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        model: str = "llama3-70b-8192",
        max_tokens: int = 1024,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.max_tokens = max_tokens
        self._client: Optional[openai.OpenAI] = None

    @property
    def client(self) -> openai.OpenAI:
        if not self.api_key:
            raise APIKeyMissingException(service="text generation", key_name="LLM_API_KEY")
        if self._client is None:
            logger.info(f"Initializing text generation client for model '{self.model}'")
            self._client = openai.OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def generate(self, prompt: str, temperature: float = 0.6) -> str:
        """
        Generate a completion for a single user prompt.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature

        Returns:
            The generated text

        Raises:
            APIKeyMissingException: If no API key was configured.
            GenerationException: If the service errors or returns no content.
        """
        client = self.client

        try:
            response = await asyncio.to_thread(
                client.chat.completions.create,
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=temperature,
            )
        except openai.APIError as e:
            logger.error(f"Text generation API error: {e}")
            raise GenerationException(source=self.model, reason=str(e)) from e

        if response.choices and response.choices[0].message and response.choices[0].message.content:
            return response.choices[0].message.content.strip()

        raise GenerationException(source=self.model, reason="API response was empty or malformed.")


def get_llm_client() -> TextGenerationClient:
    """Get a fresh client from current settings - no caching to avoid stale API keys."""
    settings = get_settings()
    return TextGenerationClient(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
    )
