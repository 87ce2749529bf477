"""
Matcher Service - AI cover letters and candidate-job match analysis.

Builds prompts from candidate and job snapshots, sends them through the
model gateway and validates what comes back.
"""

from .parser import parse_match_response
from .prompts import PromptBuilder
from .service import (
    BaseMatchingService,
    MatchingService,
    MockMatchingService,
    create_matching_service,
    enforce_word_limit,
)

__all__ = [
    "BaseMatchingService",
    "MatchingService",
    "MockMatchingService",
    "PromptBuilder",
    "create_matching_service",
    "enforce_word_limit",
    "parse_match_response",
]
