"""
Gateway interface and transport error classification.
"""

from abc import ABC, abstractmethod

import httpx
import openai

from shared.errors import AIParseError, AITimeoutError, AIUnavailableError, MatchingError


class GatewayResponseError(RuntimeError):
    """The service answered with a body of unexpected shape."""


class ModelGateway(ABC):
    """Transport to an external text-generation service."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Best-effort probe. Never raises."""

    @abstractmethod
    async def chat(self, messages: list[dict[str, str]]) -> str:
        """
        Send the ordered message list and return the response text.

        Returns an empty string when the service answers without content.
        Transport errors propagate unmodified.
        """

    async def close(self) -> None:
        """Release the underlying client."""


def classify_transport_error(error: Exception, action: str) -> MatchingError:
    """Map a raw transport exception to the matching error taxonomy."""
    if isinstance(error, MatchingError):
        return error
    # Timeout classes subclass the connection errors in both libraries
    if isinstance(error, (httpx.TimeoutException, openai.APITimeoutError)):
        return AITimeoutError()
    if isinstance(error, (httpx.ConnectError, openai.APIConnectionError)):
        return AIUnavailableError()
    return AIParseError(f"Failed to {action}: {error}")
