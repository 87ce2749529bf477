"""
Data models shared by the gateway and matcher packages.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CandidateSnapshot(BaseModel):
    """Candidate profile fields used to build prompts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    bio: Optional[str] = Field(default=None)
    cv_text: Optional[str] = Field(default=None, alias="cvText")

    @property
    def full_name(self) -> str:
        """Present name parts joined by a space, empty if none."""
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)


class CompanyRef(BaseModel):
    """Company embedded in a job record."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None


class SkillRef(BaseModel):
    """Resolved skill embedded in a job record."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str


class JobSnapshot(BaseModel):
    """Job offer fields used to build prompts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: str = Field(default="")
    description: Optional[str] = Field(default=None)
    company: Optional[CompanyRef] = Field(default=None)
    skills: list[SkillRef] = Field(default_factory=list)
    contract_type: Optional[str] = Field(default=None, alias="contractType")

    @property
    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]


@dataclass(frozen=True)
class PromptPair:
    """System/user prompt pair sent to the model."""

    system_prompt: str
    user_prompt: str

    def to_messages(self) -> list[dict[str, str]]:
        """Ordered chat messages for the gateway."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt},
        ]


@dataclass(frozen=True)
class MatchResult:
    """Validated match analysis."""

    score: int  # 0-100
    justification: str

    def __post_init__(self):
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"score must be an integer, got {self.score!r}")
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be within 0-100, got {self.score}")
        if not isinstance(self.justification, str) or not self.justification:
            raise ValueError("justification must be a non-empty string")

    def to_application_update(self) -> dict[str, object]:
        """Fields written back onto the application record."""
        return {
            "matchScore": self.score,
            "matchJustification": self.justification,
        }
