"""AgentTaskExecutor - runs one crew task through one agent."""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Mapping, Sequence

from crew_coach.crew.fallback import agent_fallback
from crew_coach.crew.prompts import build_agent_prompt
from crew_coach.llm.completion import TextCompletion
from crew_coach.memory.store import MemoryStore
from crew_coach.models import (
    LIVE_CONFIDENCE,
    AgentDefinition,
    AgentResponse,
    CrewTask,
    GoalDomain,
    MemoryEntry,
)
from crew_coach.parsing import DEFAULT_VOCABULARY, HeadingVocabulary, parse_agent_response

logger = logging.getLogger(__name__)


def _slug(role: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", role.lower()).strip("_")


class AgentTaskExecutor:
    """Builds the agent prompt, calls the model once, parses and remembers.

    A failed call is never retried and never raised: the agent's slot is
    filled with a generic fallback response instead.
    """

    def __init__(
        self,
        completion: TextCompletion,
        memory: MemoryStore,
        memory_excerpt: int = 3,
        vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY,
    ) -> None:
        self._completion = completion
        self._memory = memory
        self._memory_excerpt = memory_excerpt
        self._vocabulary = vocabulary

    def build_prompt(
        self,
        agent: AgentDefinition,
        task: CrewTask,
        query: str,
        context: Mapping[str, Any],
        prior_outputs: Sequence[AgentResponse],
        domain: GoalDomain,
    ) -> str:
        recent = self._memory.recent(agent.role, self._memory_excerpt) if agent.memory else []
        return build_agent_prompt(agent, task, query, context, domain, prior_outputs, recent)

    def run(
        self,
        agent: AgentDefinition,
        task: CrewTask,
        query: str,
        context: Mapping[str, Any],
        prior_outputs: Sequence[AgentResponse],
        domain: GoalDomain,
    ) -> AgentResponse:
        log = logging.getLogger(f"crew_coach.crew.{_slug(agent.role)}")
        prompt = self.build_prompt(agent, task, query, context, prior_outputs, domain)

        log.info(f"{agent.role}: {task.description}")
        try:
            text = self._completion.complete(prompt)
            if not text or not text.strip():
                raise ValueError("empty response")
        except Exception as e:
            log.warning(f"Agent {agent.role} failed, using fallback response: {e}")
            return agent_fallback(agent.role, query)

        sections = parse_agent_response(text, self._vocabulary)
        if agent.memory:
            try:
                snapshot = copy.deepcopy(dict(context))
            except Exception as e:
                log.warning(f"Context for {agent.role} is not deep-copyable, storing a shallow copy: {e}")
                snapshot = dict(context)
            self._memory.append(agent.role, MemoryEntry(query=query, response=text, context=snapshot))

        if agent.verbose:
            log.debug(f"{agent.role} produced {len(text)} chars, "
                      f"{len(sections.recommendations)} recommendations")
        return AgentResponse(
            agent=agent.role,
            response=text,
            confidence=LIVE_CONFIDENCE,
            recommendations=sections.recommendations,
            insights=sections.insights,
            next_steps=sections.next_steps,
            action_items=sections.action_items,
        )
