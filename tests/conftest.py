import asyncio
from typing import Optional

import pytest

from gateway import ModelGateway
from shared.config import Settings
from shared.models import CandidateSnapshot, JobSnapshot

VALID_ANALYSIS = '{"score": 64, "justification": "Solid backend experience"}'


class FakeGateway(ModelGateway):
    """In-process gateway returning scripted responses."""

    def __init__(
        self,
        responses: Optional[list[str]] = None,
        available: bool = True,
        delays: Optional[list[float]] = None,
        error: Optional[Exception] = None,
    ):
        self.responses = list(responses or [])
        self.available = available
        self.delays = list(delays or [])
        self.error = error
        self.calls: list[list[dict[str, str]]] = []
        self.availability_checks = 0
        self.closed = False

    async def is_available(self) -> bool:
        self.availability_checks += 1
        return self.available

    async def chat(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        delay = self.delays.pop(0) if self.delays else 0
        if delay:
            await asyncio.sleep(delay)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment's .env file."""
    return Settings(_env_file=None, **overrides)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def candidate() -> CandidateSnapshot:
    return CandidateSnapshot.model_validate(
        {"firstName": "Amine", "lastName": "Ben Ali", "bio": "", "cvText": ""}
    )


@pytest.fixture
def job() -> JobSnapshot:
    return JobSnapshot.model_validate(
        {
            "title": "Backend Developer",
            "company": {"name": "Acme"},
            "skills": [{"name": "Node.js"}],
            "description": "Build APIs",
        }
    )


@pytest.fixture
def detailed_candidate() -> CandidateSnapshot:
    return CandidateSnapshot.model_validate(
        {
            "_id": "65f0c0ffee",
            "firstName": "Sarah",
            "lastName": "Martin",
            "bio": "Data engineer with a taste for streaming systems",
            "cvText": "Kafka " * 600,
        }
    )


@pytest.fixture
def detailed_job() -> JobSnapshot:
    return JobSnapshot.model_validate(
        {
            "title": "Data Engineer",
            "company": {"name": "Streamly", "owner": "u-42"},
            "skills": [{"name": "Kafka"}, {"name": "Python"}, {"name": "SQL"}],
            "description": "x" * 1000,
            "contractType": "CDI",
        }
    )
