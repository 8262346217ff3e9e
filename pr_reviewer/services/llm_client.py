"""
LLM client component.

Sends a review prompt to an OpenAI-compatible chat completion endpoint and
returns the raw reply text.
"""

from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)


class LLMClientError(Exception):
    """Raised when the inference call fails."""
    pass


class LLMClient:
    """Wrapper for the OpenAI chat completions API."""

    # Sampling parameters used for every review request
    QUERY_CONFIG: Dict[str, Any] = {
        "temperature": 0.2,
        "max_tokens": 700,
        "top_p": 1,
        "frequency_penalty": 0,
        "presence_penalty": 0,
    }

    def __init__(
        self,
        api_key: str,
        model: str,
        json_mode: bool = False,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize LLM client.

        Args:
            api_key: OpenAI API key
            model: Model identifier
            json_mode: Request ``json_object`` output; only enable for models that support it
            base_url: Optional OpenAI-compatible endpoint
            timeout: Request timeout in seconds
            client: Optional preconfigured AsyncOpenAI client
        """
        self.model = model
        self.json_mode = json_mode
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        logger.info(f"Initialized OpenAI client for model {model} (json_mode={json_mode})")

    @classmethod
    def from_settings(cls, settings) -> "LLMClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_api_model,
            json_mode=settings.openai_json_mode,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout_seconds,
        )

    async def close(self) -> None:
        await self.client.close()

    async def complete(self, prompt: str) -> str:
        """
        Run one chat completion with the prompt as the system message.

        Args:
            prompt: Complete review prompt

        Returns:
            Reply text, stripped; empty if the model returned no content

        Raises:
            LLMClientError: If the API call fails
        """
        params: Dict[str, Any] = dict(self.QUERY_CONFIG)
        if self.json_mode:
            params["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": prompt}],
                **params,
            )
        except openai.OpenAIError as e:
            raise LLMClientError(f"Chat completion with {self.model} failed: {e}") from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
