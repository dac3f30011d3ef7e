"""Shared fixtures: configs and stub completion capabilities."""

from __future__ import annotations

import pytest

from crew_coach.config import CrewCoachConfig, LLMConfig
from crew_coach.exceptions import CompletionError
from crew_coach.memory.store import MemoryStore

TEST_API_KEY = "sk-test-0123456789abcdefghijklmnop"

AGENT_TEMPLATE = """**Analysis**: Output {n} for the crew.
**Recommendations**:
- Recommendation {n}.1
- Recommendation {n}.2
**Insights**:
- Insight {n}.1
**Next Steps**:
- Step {n}.1
"""


class ScriptedCompletion:
    """Returns a distinct, well-formed agent answer per call and records prompts."""

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.prompts: list[str] = []
        self._fail_on = fail_on or set()

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        n = len(self.prompts)
        if n in self._fail_on:
            raise CompletionError(f"scripted failure on call {n}")
        return f"AGENT-OUTPUT-{n}\n" + AGENT_TEMPLATE.format(n=n)


class FailingCompletion:
    def __init__(self) -> None:
        self.calls = 0

    def complete(self, prompt: str) -> str:
        self.calls += 1
        raise CompletionError("service unavailable")


class ExplodingCompletion:
    """Must never be called."""

    def complete(self, prompt: str) -> str:
        raise AssertionError("completion called in fallback mode")


@pytest.fixture
def configured_config() -> CrewCoachConfig:
    return CrewCoachConfig(llm=LLMConfig(provider="openai", api_key=TEST_API_KEY))


@pytest.fixture
def unconfigured_config() -> CrewCoachConfig:
    return CrewCoachConfig(llm=LLMConfig(provider="openai", api_key=""))


@pytest.fixture
def memory() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def scripted() -> ScriptedCompletion:
    return ScriptedCompletion()
