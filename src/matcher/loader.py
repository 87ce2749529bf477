"""
Snapshot loader for the CLI.
Loads candidate and job records from YAML files.
"""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from shared.models import CandidateSnapshot, JobSnapshot


def _load_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_candidate(path: Path) -> CandidateSnapshot:
    """Load a candidate profile (firstName, lastName, bio, cvText)."""
    data = _load_mapping(path)
    # Profiles exported by the platform nest the candidate under "profile"
    data = data.get("profile", data)
    candidate = CandidateSnapshot.model_validate(data)
    logger.debug(f"Loaded candidate '{candidate.full_name or 'unnamed'}' from {path}")
    return candidate


def load_job(path: Path) -> JobSnapshot:
    """
    Load a job offer.

    Skills may be given as names or as {name: ...} mappings, and the
    company as a name or a {name: ...} mapping.
    """
    data = dict(_load_mapping(path))

    skills = data.get("skills") or []
    data["skills"] = [{"name": s} if isinstance(s, str) else s for s in skills]

    if isinstance(data.get("company"), str):
        data["company"] = {"name": data["company"]}

    job = JobSnapshot.model_validate(data)
    logger.debug(f"Loaded job '{job.title}' with {len(job.skills)} skills from {path}")
    return job
