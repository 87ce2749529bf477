"""
Ollama API client for chat completions.
Uses the native endpoints: GET /api/tags (probe) and POST /api/chat.
"""

from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from shared.config import Settings

from .base import GatewayResponseError, ModelGateway


class OllamaMessage(BaseModel):
    """Message part of an /api/chat response."""

    role: Optional[str] = None
    content: Optional[str] = None


class OllamaChatResponse(BaseModel):
    """Non-streaming /api/chat response body."""

    model: Optional[str] = None
    message: OllamaMessage
    done: Optional[bool] = None


def build_chat_request(model: str, messages: list[dict[str, str]]) -> dict[str, Any]:
    """Build the /api/chat request body."""
    return {
        "model": model,
        "messages": [dict(m) for m in messages],
        "stream": False,
    }


class OllamaGateway(ModelGateway):
    """Client for a local or remote Ollama server."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.base_url = settings.ollama_url.rstrip("/")
        self.model = settings.ollama_model
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                limits=httpx.Limits(
                    max_connections=self.settings.ai_max_connections,
                    max_keepalive_connections=self.settings.ai_max_connections,
                ),
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def is_available(self) -> bool:
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/api/tags",
                timeout=self.settings.ai_probe_timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Ollama service unavailable: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"Ollama probe returned status {response.status_code}")
            return False
        return True

    async def chat(self, messages: list[dict[str, str]]) -> str:
        client = await self._get_client()

        logger.debug(f"Sending {len(messages)} messages to Ollama model {self.model}")
        response = await client.post(
            f"{self.base_url}/api/chat",
            headers=self.headers,
            json=build_chat_request(self.model, messages),
        )
        response.raise_for_status()

        try:
            body = OllamaChatResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise GatewayResponseError(f"Unexpected Ollama response: {e}") from e

        return body.message.content or ""
