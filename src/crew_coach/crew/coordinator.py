"""CrewCoordinator - runs a goal domain's crew and synthesizes one reply.

The completion mode is decided once per execution:

1. FALLBACK - no usable credential; the FallbackEngine answers immediately.
2. LIVE - each task runs in declared order through the AgentTaskExecutor,
   every agent seeing all earlier agents' output, then one coordination call
   merges the results.

``execute`` never raises and always reports success. Failures only degrade
content: a failed agent gets a generic response, a failed synthesis gets the
local combiner, and anything unexpected hands the whole run to the
FallbackEngine.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional

from crew_coach.config import CrewCoachConfig
from crew_coach.crew.executor import AgentTaskExecutor
from crew_coach.crew.fallback import FallbackEngine, combine
from crew_coach.crew.prompts import build_coordination_prompt
from crew_coach.crew.registry import get_crew, resolve_domain
from crew_coach.exceptions import UnsupportedExecutionModeError
from crew_coach.llm.completion import LangChainCompletion, TextCompletion
from crew_coach.memory.store import MemoryStore
from crew_coach.models import (
    AgentResponse,
    CompletionMode,
    CrewExecution,
    ExecutionMode,
    GoalDomain,
    MemoryEntry,
)
from crew_coach.parsing import DEFAULT_VOCABULARY, HeadingVocabulary

logger = logging.getLogger(__name__)


class LiveCrewRunner:
    """Sequential crew run against a live completion capability."""

    def __init__(
        self,
        completion: TextCompletion,
        executor: AgentTaskExecutor,
        emit: Callable[..., Any],
    ) -> None:
        self._completion = completion
        self._executor = executor
        self._emit = emit

    def run(self, domain: GoalDomain, query: str, context: Mapping[str, Any]) -> CrewExecution:
        crew = get_crew(domain)
        if crew.process != ExecutionMode.SEQUENTIAL:
            raise UnsupportedExecutionModeError(crew.process.value)

        results: list[AgentResponse] = []
        for index, task in enumerate(crew.tasks):
            agent = crew.agent_for(task)
            response = self._executor.run(agent, task, query, context, list(results), domain)
            results.append(response)
            self._emit("agent_complete", index=index, total=len(crew.tasks), data=response)

        final_output = self.synthesize(results, query, domain)
        self._emit("synthesis_complete", data=final_output)
        return CrewExecution(
            domain=domain,
            results=results,
            final_output=final_output,
            success=True,
            mode=CompletionMode.LIVE,
        )

    def synthesize(self, results: list[AgentResponse], query: str, domain: GoalDomain) -> str:
        prompt = build_coordination_prompt(results, query, domain)
        try:
            text = self._completion.complete(prompt)
            if not text or not text.strip():
                raise ValueError("empty response")
            return text
        except Exception as e:
            logger.warning(f"Coordination failed, combining agent outputs locally: {e}")
            return combine(results)


class CrewCoordinator:
    """Entry point for crew executions and agent memory inspection."""

    def __init__(
        self,
        config: CrewCoachConfig | None = None,
        completion: TextCompletion | None = None,
        memory: MemoryStore | None = None,
        vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY,
        emit: Optional[Callable[..., Any]] = None,
    ) -> None:
        self._config = config or CrewCoachConfig.from_env()
        self._completion = completion
        self._completion_lock = threading.Lock()
        self._memory = memory or MemoryStore(self._config.crew.memory_capacity)
        self._vocabulary = vocabulary
        self._emit = emit or (lambda *a, **kw: None)
        self._fallback = FallbackEngine(self._config)

        if self.mode == CompletionMode.LIVE:
            logger.info(f"Crew coordinator configured with {self._config.llm.provider}: {self._config.llm.model}")
        else:
            logger.warning("LLM credential not configured - crews will use fallback responses")

    @property
    def memory(self) -> MemoryStore:
        return self._memory

    @property
    def mode(self) -> CompletionMode:
        return CompletionMode.LIVE if self._config.llm.is_configured else CompletionMode.FALLBACK

    def is_configured(self) -> bool:
        return self.mode == CompletionMode.LIVE

    def set_emit(self, emit: Callable[..., Any]) -> None:
        self._emit = emit

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(
        self,
        domain: GoalDomain | str,
        query: str,
        context: Mapping[str, Any] | None = None,
    ) -> CrewExecution:
        domain = resolve_domain(domain)
        context = dict(context or {})
        mode = self.mode

        if mode == CompletionMode.FALLBACK:
            self._notify_fallback("not_configured")
            return self._fallback.run(domain, query, context)

        start_time = time.time()
        try:
            self._emit("crew_start", domain=domain.value, mode=mode.value)
            runner = LiveCrewRunner(self._get_completion(), self._make_executor(), self._emit)
            execution = runner.run(domain, query, context)
        except Exception as e:
            logger.error(f"Crew execution failed for {domain.value}: {e}", exc_info=True)
            self._notify_fallback(str(e))
            return self._fallback.run(domain, query, context)

        execution.execution_time_ms = (time.time() - start_time) * 1000
        logger.info(f"Crew {domain.value} complete: {len(execution.results)} agents "
                    f"in {execution.execution_time_ms:.0f}ms")
        return execution

    def sleep_coaching(self, query: str, context: Mapping[str, Any] | None = None) -> CrewExecution:
        return self.execute(GoalDomain.SLEEP_TRACKING, query, context)

    def steps_coaching(self, query: str, context: Mapping[str, Any] | None = None) -> CrewExecution:
        return self.execute(GoalDomain.DAILY_STEPS, query, context)

    # ------------------------------------------------------------------
    # Memory
    # ------------------------------------------------------------------

    def clear_memory(self, role: str | None = None) -> None:
        self._memory.clear(role)

    def get_memory(self, role: str) -> list[MemoryEntry]:
        return self._memory.get(role)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_completion(self) -> TextCompletion:
        with self._completion_lock:
            if self._completion is None:
                from crew_coach.llm.provider import create_llm
                self._completion = LangChainCompletion(create_llm(self._config))
            return self._completion

    def _notify_fallback(self, reason: str) -> None:
        try:
            self._emit("crew_fallback", reason=reason)
        except Exception as e:
            logger.warning(f"Event callback failed: {e}")

    def _make_executor(self) -> AgentTaskExecutor:
        return AgentTaskExecutor(
            completion=self._get_completion(),
            memory=self._memory,
            memory_excerpt=self._config.crew.memory_excerpt,
            vocabulary=self._vocabulary,
        )
