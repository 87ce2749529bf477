"""
Matching Service - cover letter generation and match analysis.

Orchestrates the gateway, prompt builder and parser, applies output
policy and maps transport failures to typed errors.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from gateway import ModelGateway, classify_transport_error, create_gateway
from shared.config import Settings
from shared.errors import AIParseError, AITimeoutError, AIUnavailableError, MatchingError
from shared.models import CandidateSnapshot, JobSnapshot, MatchResult, PromptPair

from .parser import parse_match_response
from .prompts import PromptBuilder

MOCK_COVER_LETTER = """Madame, Monsieur,

Je me permets de vous adresser ma candidature pour le poste proposé au sein de votre entreprise.

Fort de mon expérience et de mes compétences, je suis convaincu de pouvoir apporter une contribution significative à votre équipe. Mon parcours m'a permis de développer une expertise solide dans les domaines requis.

Je serais ravi de pouvoir échanger avec vous lors d'un entretien afin de vous présenter plus en détail mon profil et ma motivation.

Dans l'attente de votre retour, je vous prie d'agréer, Madame, Monsieur, l'expression de mes salutations distinguées."""

MOCK_MATCH_ANALYSIS = json.dumps(
    {
        "score": 75,
        "justification": "Bon profil avec compétences correspondantes aux exigences du poste.",
    },
    ensure_ascii=False,
)

ELLIPSIS = "..."


def enforce_word_limit(text: str, max_words: int) -> str:
    """Truncate text to max_words whitespace-separated words, marking the cut."""
    words = text.split()
    if len(words) > max_words:
        return " ".join(words[:max_words]) + ELLIPSIS
    return text


class BaseMatchingService(ABC):
    """Public interface of the matching subsystem."""

    @abstractmethod
    async def generate_cover_letter(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> str:
        """Generate a cover letter for the candidate applying to the job."""

    @abstractmethod
    async def analyze_match(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> MatchResult:
        """Score candidate-job fit from 0 to 100 with a justification."""

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


class MockMatchingService(BaseMatchingService):
    """Canned outputs for offline demos and tests. Never touches the network."""

    async def generate_cover_letter(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> str:
        logger.debug("Mock mode: returning canned cover letter")
        return MOCK_COVER_LETTER

    async def analyze_match(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> MatchResult:
        logger.debug("Mock mode: returning canned match analysis")
        result = parse_match_response(MOCK_MATCH_ANALYSIS)
        if result is None:
            raise AIParseError("Mock match analysis is invalid")
        return result


class MatchingService(BaseMatchingService):
    """Live matching against a text-generation gateway."""

    def __init__(
        self,
        gateway: ModelGateway,
        settings: Settings,
        prompts: Optional[PromptBuilder] = None,
    ):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts or PromptBuilder(
            locale=settings.ai_locale,
            max_words=settings.ai_cover_letter_max_words,
        )

    async def close(self) -> None:
        await self.gateway.close()

    async def _ensure_available(self) -> None:
        if not await self.gateway.is_available():
            logger.error("AI service unavailable, aborting request")
            raise AIUnavailableError()

    async def _send(self, prompt: PromptPair, action: str, with_timeout: bool = True) -> str:
        """
        Send a prompt pair through the gateway.

        With a timeout the caller stops waiting after the configured window.
        The pending request is cancelled, but the remote service may keep
        generating.
        """
        try:
            if with_timeout:
                return await asyncio.wait_for(
                    self.gateway.chat(prompt.to_messages()),
                    timeout=self.settings.timeout_seconds,
                )
            return await self.gateway.chat(prompt.to_messages())
        except asyncio.TimeoutError as e:
            logger.error(
                f"AI request timed out after {self.settings.ollama_timeout}ms ({action})"
            )
            raise AITimeoutError() from e
        except MatchingError:
            raise
        except Exception as e:
            error = classify_transport_error(e, action)
            logger.error(f"AI request failed ({action}): {error.code} - {e}")
            raise error from e

    async def generate_cover_letter(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> str:
        await self._ensure_available()

        prompt = self.prompts.cover_letter(candidate, job)
        response = await self._send(prompt, action="generate cover letter")

        max_words = self.settings.ai_cover_letter_max_words
        letter = enforce_word_limit(response, max_words)
        if letter is not response:
            logger.warning(f"Cover letter exceeded {max_words} words, truncated")

        logger.info(f"Generated cover letter for {job.title}: {len(letter.split())} words")
        return letter

    async def analyze_match(
        self, candidate: CandidateSnapshot, job: JobSnapshot
    ) -> MatchResult:
        await self._ensure_available()

        prompt = self.prompts.match_analysis(candidate, job)
        response = await self._send(prompt, action="analyze match")
        result = parse_match_response(response)

        if result is None:
            logger.warning("Could not parse match analysis, retrying with strict prompt")
            strict_prompt = self.prompts.strict_match_analysis(candidate, job)
            # Retry is unbounded unless ai_retry_timeout is set
            response = await self._send(
                strict_prompt,
                action="analyze match",
                with_timeout=self.settings.ai_retry_timeout,
            )
            result = parse_match_response(response)

            if result is None:
                logger.error("Match analysis still unparseable after retry")
                raise AIParseError("Failed to parse AI response after retry")

        logger.info(f"Analyzed match for {job.title}: score={result.score}")
        return result


def create_matching_service(
    settings: Settings,
    gateway: Optional[ModelGateway] = None,
) -> BaseMatchingService:
    """Build the mock or live service according to settings."""
    if settings.use_mock_ai:
        logger.info("AI mock mode enabled")
        return MockMatchingService()
    return MatchingService(gateway or create_gateway(settings), settings)
