"""Crew Coach data models - crew definitions, memory and execution results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from crew_coach.exceptions import CrewConfigurationError


# Confidence tiers. Fixed values, not estimated from the response.
LIVE_CONFIDENCE = 0.85
CANNED_CREW_CONFIDENCE = 0.8
FALLBACK_AGENT_CONFIDENCE = 0.6


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class GoalDomain(str, Enum):
    SLEEP_TRACKING = "sleep_tracking"
    DAILY_STEPS = "daily_steps"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class ExecutionMode(str, Enum):
    SEQUENTIAL = "sequential"
    HIERARCHICAL = "hierarchical"  # reserved, no behavior


class CompletionMode(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


# ---------------------------------------------------------------------------
# Crew definitions
# ---------------------------------------------------------------------------

class AgentDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    goal: str
    backstory: str
    tools: tuple[str, ...] = ()
    memory: bool = True
    verbose: bool = True


class CrewTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    agent: str
    expected_output: str


class CrewDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: GoalDomain
    agents: dict[str, AgentDefinition]
    tasks: tuple[CrewTask, ...]
    process: ExecutionMode = ExecutionMode.SEQUENTIAL
    memory: bool = True
    verbose: bool = True

    def agent_for(self, task: CrewTask) -> AgentDefinition:
        try:
            return self.agents[task.agent]
        except KeyError:
            raise CrewConfigurationError(
                f"Task '{task.description[:40]}' references unknown agent '{task.agent}'"
            ) from None

    @property
    def roles(self) -> list[str]:
        return [self.agent_for(t).role for t in self.tasks]


# ---------------------------------------------------------------------------
# Memory
# ---------------------------------------------------------------------------

class MemoryEntry(BaseModel):
    query: str
    response: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    context: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class AgentResponse(BaseModel):
    agent: str
    response: str
    confidence: float = LIVE_CONFIDENCE
    recommendations: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)


class CrewExecution(BaseModel):
    domain: GoalDomain
    results: list[AgentResponse] = Field(default_factory=list)
    final_output: str = ""
    execution_time_ms: float = 0.0
    success: bool = True
    mode: CompletionMode = CompletionMode.LIVE
