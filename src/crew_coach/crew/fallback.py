"""Fallback engine - network-free crew results.

Used when no completion capability is configured, when a single agent call
fails, and when the synthesis step fails. Everything here is deterministic:
the same domain, query and context always give the same output.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from crew_coach.config import CrewCoachConfig
from crew_coach.crew.prompts import display
from crew_coach.crew.registry import resolve_domain
from crew_coach.models import (
    CANNED_CREW_CONFIDENCE,
    FALLBACK_AGENT_CONFIDENCE,
    AgentResponse,
    CompletionMode,
    CrewExecution,
    GoalDomain,
)

logger = logging.getLogger(__name__)

MAX_COMBINED_RECOMMENDATIONS = 5
MAX_COMBINED_INSIGHTS = 3

DEFAULT_TARGET_SLEEP_HOURS = 8
DEFAULT_DAILY_STEP_TARGET = 10000

CALL_TO_ACTION = (
    "Start with action #1 today and gradually build these habits into your routine. "
    "Consistency is more important than perfection!"
)

_HEADERS = {
    GoalDomain.SLEEP_TRACKING: ("😴", "Sleep optimization"),
    GoalDomain.DAILY_STEPS: ("🚶‍♀️", "Daily movement"),
}


def combine(results: Sequence[AgentResponse]) -> str:
    """Merge agent outputs into one message without calling a model.

    Takes up to five recommendations and three insights in first-seen order,
    duplicates included.
    """
    recommendations = [rec for r in results for rec in r.recommendations][:MAX_COMBINED_RECOMMENDATIONS]
    insights = [ins for r in results for ins in r.insights][:MAX_COMBINED_INSIGHTS]

    parts = ["Based on expert analysis, here's your personalized strategy:"]
    if recommendations:
        parts.append(
            "**Priority Actions:**\n"
            + "\n".join(f"{i}. {rec}" for i, rec in enumerate(recommendations, start=1))
        )
    if insights:
        parts.append("**Key Insights:**\n" + "\n".join(f"• {ins}" for ins in insights))
    parts.append(f"**Next Steps:**\n{CALL_TO_ACTION}")
    parts.append("What would you like to focus on first?")
    return "\n\n".join(parts)


def agent_fallback(role: str, query: str) -> AgentResponse:
    """Generic, role-labeled guidance for an agent whose call failed."""
    return AgentResponse(
        agent=role,
        response=(
            f"As your {role}, I'm here to help with your query about \"{query}\". "
            "While I'm working with limited connectivity, I can still provide valuable "
            "guidance based on established best practices."
        ),
        confidence=FALLBACK_AGENT_CONFIDENCE,
        recommendations=["Maintain current routine", "Track progress daily", "Stay motivated"],
        insights=["Consistency is key to success", "Small changes lead to big results"],
        next_steps=["Continue current approach", "Monitor results", "Adjust as needed"],
        action_items=["Continue with current plan", "Monitor progress", "Stay consistent"],
    )


class FallbackEngine:
    """Canned crew for a domain, with context values interpolated."""

    def __init__(self, config: CrewCoachConfig | None = None) -> None:
        self._config = config or CrewCoachConfig.from_env()

    def run(self, domain: GoalDomain | str, query: str, context: Mapping[str, Any] | None = None) -> CrewExecution:
        return self.whole_crew_fallback(domain, query, context)

    def whole_crew_fallback(
        self,
        domain: GoalDomain | str,
        query: str,
        context: Mapping[str, Any] | None = None,
    ) -> CrewExecution:
        domain = resolve_domain(domain)
        ctx = context or {}
        logger.info(f"Using fallback crew for {domain.value}")

        results = self.responses_for(domain, ctx)
        return CrewExecution(
            domain=domain,
            results=results,
            final_output=self.final_output(domain, results, ctx),
            execution_time_ms=self._config.crew.fallback_execution_time_ms,
            success=True,
            mode=CompletionMode.FALLBACK,
        )

    def responses_for(self, domain: GoalDomain, ctx: Mapping[str, Any]) -> list[AgentResponse]:
        if domain == GoalDomain.SLEEP_TRACKING:
            return _sleep_responses(ctx)
        return _steps_responses(ctx)

    def final_output(self, domain: GoalDomain, results: Sequence[AgentResponse], ctx: Mapping[str, Any]) -> str:
        emoji, title = _HEADERS[domain]
        return f"{emoji} **{title} Plan**\n{_goal_summary(domain, ctx)}\n\n{combine(results)}"


# ---------------------------------------------------------------------------
# Canned responses
# ---------------------------------------------------------------------------

def _goal_summary(domain: GoalDomain, ctx: Mapping[str, Any]) -> str:
    if domain == GoalDomain.SLEEP_TRACKING:
        target = display(ctx.get("targetSleepHours"), DEFAULT_TARGET_SLEEP_HOURS)
        bedtime = ctx.get("targetBedtime")
        summary = f"Goal: {target} hours of sleep each night"
        return f"{summary}, lights out at {bedtime}" if bedtime else summary
    current = display(ctx.get("currentSteps"), 0)
    target = display(ctx.get("dailyStepTarget"), DEFAULT_DAILY_STEP_TARGET)
    return f"Goal: {target} steps today ({current} so far)"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _remaining_steps(ctx: Mapping[str, Any]) -> str:
    remaining = ctx.get("remainingSteps")
    if remaining is None:
        current = ctx.get("currentSteps")
        target = ctx.get("dailyStepTarget")
        if target is None or target == "":
            target = DEFAULT_DAILY_STEP_TARGET
        if _is_number(current) and _is_number(target):
            remaining = max(target - current, 0)
    return display(remaining, "more")



def _sleep_responses(ctx: Mapping[str, Any]) -> list[AgentResponse]:
    target = display(ctx.get("targetSleepHours"), DEFAULT_TARGET_SLEEP_HOURS)
    return [
        AgentResponse(
            agent="Sleep Quality Analyst",
            response=(
                f"Based on your sleep data, I can see you're targeting {target} hours of sleep. "
                "Your current patterns show room for optimization in sleep consistency and quality."
            ),
            confidence=CANNED_CREW_CONFIDENCE,
            action_items=["Track sleep consistently", "Maintain regular bedtime", "Monitor sleep quality"],
            insights=["Sleep consistency is key to quality", "Room temperature affects sleep quality"],
            recommendations=[
                "Maintain consistent bedtime and wake time",
                "Keep bedroom temperature between 65-68°F",
                "Avoid screens 1 hour before bed",
                "Create a relaxing bedtime routine",
            ],
            next_steps=["Set bedtime reminder", "Prepare bedroom environment", "Log tonight's sleep"],
        ),
        AgentResponse(
            agent="Sleep Optimization Coach",
            response=(
                "Your sleep habits can be optimized through better sleep hygiene and routine "
                "establishment. Focus on consistency and environmental factors for better rest."
            ),
            confidence=CANNED_CREW_CONFIDENCE,
            action_items=["Establish bedtime routine", "Optimize sleep environment", "Track sleep quality"],
            insights=["Routine helps signal sleep time to your body", "Environment greatly impacts sleep quality"],
            recommendations=[
                "Start wind-down routine 1 hour before bed",
                "Keep bedroom dark, cool, and quiet",
                "Avoid caffeine after 2 PM",
                "Use comfortable bedding and pillows",
            ],
            next_steps=["Plan tonight's routine", "Adjust bedroom setup", "Set caffeine cutoff reminder"],
        ),
    ]


def _steps_responses(ctx: Mapping[str, Any]) -> list[AgentResponse]:
    current = display(ctx.get("currentSteps"), 0)
    target = display(ctx.get("dailyStepTarget"), DEFAULT_DAILY_STEP_TARGET)
    return [
        AgentResponse(
            agent="Physical Activity Data Analyst",
            response=(
                f"Your current step count of {current} shows you need {_remaining_steps(ctx)} steps "
                f"to reach your {target} step goal."
            ),
            confidence=CANNED_CREW_CONFIDENCE,
            action_items=["Increase daily movement", "Find walking opportunities", "Track step progress"],
            insights=["Small movements throughout day add up", "Consistency matters more than intensity"],
            recommendations=[
                "Take stairs instead of elevators",
                "Park farther away from destinations",
                "Take walking breaks every hour",
                "Walk during phone calls",
                "Use a standing desk when possible",
            ],
            next_steps=["Take a 10-minute walk now", "Set hourly movement reminders", "Plan walking routes"],
        ),
        AgentResponse(
            agent="Movement and Walking Coach",
            response=(
                "To reach your step goal, focus on integrating movement into your daily routine. "
                "Small changes can lead to significant increases in daily activity."
            ),
            confidence=CANNED_CREW_CONFIDENCE,
            action_items=["Integrate movement into routine", "Set movement reminders", "Track progress"],
            insights=["Habit stacking makes movement automatic", "Social walking increases adherence"],
            recommendations=[
                "Schedule 3 walking breaks during work",
                "Walk to nearby errands instead of driving",
                "Take evening walks with family/friends",
                "Use fitness apps for motivation",
                "Join walking groups or challenges",
            ],
            next_steps=["Schedule next walk", "Invite someone to walk with you", "Download step tracking app"],
        ),
    ]
