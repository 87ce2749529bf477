"""
Model Gateway - transport to the external text-generation service.
"""

from shared.config import Settings

from .base import GatewayResponseError, ModelGateway, classify_transport_error
from .ollama import OllamaGateway, build_chat_request
from .openai_compat import OpenAIGateway


def create_gateway(settings: Settings) -> ModelGateway:
    """Build the gateway selected by ``settings.ai_provider``."""
    if settings.ai_provider == "openai":
        return OpenAIGateway(settings)
    return OllamaGateway(settings)


__all__ = [
    "GatewayResponseError",
    "ModelGateway",
    "OllamaGateway",
    "OpenAIGateway",
    "build_chat_request",
    "classify_transport_error",
    "create_gateway",
]
