# Shared module for configuration, models, and errors
from .config import Settings, get_settings
from .errors import AIParseError, AITimeoutError, AIUnavailableError, MatchingError
from .models import (
    CandidateSnapshot,
    CompanyRef,
    JobSnapshot,
    MatchResult,
    PromptPair,
    SkillRef,
)

__all__ = [
    "Settings",
    "get_settings",
    "MatchingError",
    "AIUnavailableError",
    "AITimeoutError",
    "AIParseError",
    "CandidateSnapshot",
    "CompanyRef",
    "JobSnapshot",
    "SkillRef",
    "PromptPair",
    "MatchResult",
]
