"""
Typed errors raised by the matching subsystem.

Each error carries the HTTP status and machine-readable code the CRUD
layer uses when turning it into a client response.
"""

from typing import Any, Optional


class MatchingError(Exception):
    """Base class for AI matching failures."""

    status_code: int = 500
    code: str = "AI_ERROR"
    default_message: str = "AI request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Error payload in the platform's response envelope."""
        return {
            "success": False,
            "error": {"code": self.code, "message": self.message},
        }


class AIUnavailableError(MatchingError):
    """The text-generation service is unreachable or not running."""

    status_code = 503
    code = "AI_UNAVAILABLE"
    default_message = "AI service unavailable. Please check that Ollama is running."


class AITimeoutError(MatchingError):
    """The service did not answer within the configured window."""

    status_code = 504
    code = "AI_TIMEOUT"
    default_message = "AI request timed out. Please try again."


class AIParseError(MatchingError):
    """The model answered but its output could not be used."""

    status_code = 500
    code = "AI_PARSE_ERROR"
    default_message = "Failed to parse AI response"
