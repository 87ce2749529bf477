"""
Parser for match analysis responses.

Models wrap their JSON in markdown fences, surround it with prose or
send floats; anything that cannot be coerced into a valid MatchResult
yields None instead of raising.
"""

import json
import math
import re
from typing import Any, Optional

from loguru import logger

from shared.models import MatchResult

_JSON_FENCE = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE = re.compile(r"```\s*")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers and surrounding whitespace."""
    text = _JSON_FENCE.sub("", text)
    text = _FENCE.sub("", text)
    return text.strip()


def round_score(score: float) -> int:
    """Round half up, so 82.5 becomes 83."""
    return math.floor(score + 0.5)


def _is_valid_score(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # NaN and infinities fail the range check
    return 0 <= value <= 100


def parse_match_response(response: str) -> Optional[MatchResult]:
    """
    Extract a MatchResult from raw model output.

    Returns:
        MatchResult, or None if the output is not a valid analysis
    """
    cleaned = strip_code_fences(response or "")

    # First "{" to last "}"
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]

    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Match response is not valid JSON: {e}")
        return None

    if not isinstance(parsed, dict):
        return None

    score = parsed.get("score")
    justification = parsed.get("justification")

    if not _is_valid_score(score):
        logger.debug(f"Rejected match score: {score!r}")
        return None
    if not isinstance(justification, str) or not justification:
        logger.debug("Rejected empty or missing justification")
        return None

    return MatchResult(score=round_score(score), justification=justification)
