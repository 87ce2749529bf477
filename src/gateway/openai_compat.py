"""
Gateway for OpenAI-compatible chat completion endpoints.
Works against OpenAI itself or Ollama's /v1 compatibility layer.
"""

from typing import Optional

import openai
from loguru import logger
from openai import AsyncOpenAI

from shared.config import Settings

from .base import GatewayResponseError, ModelGateway


class OpenAIGateway(ModelGateway):
    """Chat completions through the openai SDK."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.settings = settings
        self.model = settings.openai_model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key.get_secret_value(),
                base_url=self.settings.openai_base_url,
                timeout=self.settings.timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def is_available(self) -> bool:
        try:
            await self.client.with_options(
                timeout=self.settings.ai_probe_timeout
            ).models.list()
        except openai.OpenAIError as e:
            logger.warning(f"OpenAI-compatible service unavailable: {e}")
            return False
        return True

    async def chat(self, messages: list[dict[str, str]]) -> str:
        logger.debug(f"Sending {len(messages)} messages to {self.model}")
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            stream=False,
        )

        if not response.choices:
            raise GatewayResponseError("Chat completion returned no choices")

        return response.choices[0].message.content or ""
