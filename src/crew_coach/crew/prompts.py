"""Prompt templates for crew agents and the coordination (synthesis) step."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from crew_coach.models import AgentDefinition, AgentResponse, CrewTask, GoalDomain, MemoryEntry

FIRST_AGENT_MARKER = "None - you are the first agent in this crew."

AGENT_PROMPT = """# Agent Role: {role}

## Agent Profile
**Goal**: {goal}
**Backstory**: {backstory}
**Available Tools**: {tools}

## Current Task
{task}
**Expected Output**: {expected_output}

## User Context
{context}

## Previous Agent Outputs
{previous}

## User Query
"{query}"
{memory}
## Instructions
As the {role}, provide your specialized analysis and recommendations. Focus on your specific expertise area while considering the user's context and previous agent insights. Provide actionable, specific advice that aligns with your role.

Expected Output Format:
**Analysis**: Your specialized assessment
**Recommendations**:
- 3-5 specific actionable items, one per line
**Insights**:
- Key patterns or observations, one per line
**Next Steps**:
- Immediate actions the user can take, one per line

Be conversational, supportive, and provide specific, measurable recommendations within your area of expertise."""

MEMORY_BLOCK = """
Previous interactions with this user:
{pairs}
"""

COORDINATION_PROMPT = """# Crew Coordination Task

You are the crew coordinator for a {domain} assistance team. Multiple specialized agents have provided their analysis and recommendations for this user query: "{query}"

## Agent Responses:
{responses}

## Your Task
Synthesize these expert insights into a cohesive, actionable response for the user. Create a unified plan that:

1. **Integrates all agent recommendations** into a coherent strategy
2. **Prioritizes actions** based on impact and feasibility
3. **Provides specific next steps** the user can take today
4. **Maintains an encouraging, supportive tone**
5. **Includes measurable goals** where appropriate

Format your response as a conversational message that feels like it's coming from a unified AI assistant, not multiple separate agents. Focus on what the user should do next."""

AGENT_SECTION = """### {agent}
{response}

Key Recommendations:
{recommendations}
"""


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_agent_prompt(
    agent: AgentDefinition,
    task: CrewTask,
    query: str,
    context: Mapping[str, Any],
    domain: GoalDomain,
    prior_outputs: Sequence[AgentResponse],
    memory: Sequence[MemoryEntry],
) -> str:
    previous = "\n\n".join(r.response for r in prior_outputs)
    memory_text = ""
    if memory:
        pairs = "\n\n".join(f"Q: {m.query}\nA: {m.response}" for m in memory)
        memory_text = MEMORY_BLOCK.format(pairs=pairs)

    return AGENT_PROMPT.format(
        role=agent.role,
        goal=agent.goal,
        backstory=agent.backstory,
        tools=", ".join(agent.tools) or "None",
        task=task.description,
        expected_output=task.expected_output,
        context=format_context(domain, context),
        previous=previous or FIRST_AGENT_MARKER,
        query=query,
        memory=memory_text,
    )


def build_coordination_prompt(
    results: Sequence[AgentResponse],
    query: str,
    domain: GoalDomain,
) -> str:
    sections = []
    for r in results:
        sections.append(AGENT_SECTION.format(
            agent=r.agent,
            response=r.response,
            recommendations="\n".join(f"- {rec}" for rec in r.recommendations) or "- (none extracted)",
        ))
    return COORDINATION_PROMPT.format(
        domain=domain.label,
        query=query,
        responses="\n\n".join(sections),
    )


# ---------------------------------------------------------------------------
# Context formatting
# ---------------------------------------------------------------------------

def format_context(domain: GoalDomain, context: Mapping[str, Any]) -> str:
    """Render the caller's context fields for the given domain.

    Absent (missing, None or empty) fields show their default text.
    """
    ctx = context or {}
    if domain == GoalDomain.SLEEP_TRACKING:
        return _format_sleep_context(ctx)
    if domain == GoalDomain.DAILY_STEPS:
        return _format_steps_context(ctx)
    return "Context not available for this agent type."


def _format_sleep_context(ctx: Mapping[str, Any]) -> str:
    lines = [
        "Sleep Profile:",
        f"- Target sleep: {display(ctx.get('targetSleepHours'), 8)} hours",
        f"- Bedtime: {display(ctx.get('targetBedtime'), 'Not set')}",
        f"- Wake time: {display(ctx.get('targetWakeTime'), 'Not set')}",
        f"- Last night's sleep: {display(ctx.get('lastNightSleep'), 'Not logged')} hours",
        f"- Sleep score: {display(ctx.get('sleepScore'), 'Not available')}",
        f"- Sleep efficiency: {display(ctx.get('sleepEfficiency'), 'Not available')}%",
        f"- Wake-ups: {display(ctx.get('wakeUps'), 'Not tracked')}",
        f"- Room temperature: {display(ctx.get('roomTemperature'), 'Not set')}°F",
        f"- Tracking method: {display(ctx.get('trackingMethod'), 'Manual')}",
        f"- Sleep streak: {display(ctx.get('sleepStreak'), 0)} days",
        f"- Weekly average: {display(ctx.get('weeklyAverage'), 0)} hours",
    ]
    return "\n".join(lines)


def _format_steps_context(ctx: Mapping[str, Any]) -> str:
    walking_times = ctx.get("preferredWalkingTimes")
    if isinstance(walking_times, (list, tuple)):
        walking_times = ", ".join(str(t) for t in walking_times)

    lines = [
        "Steps Profile:",
        f"- Daily target: {display(ctx.get('dailyStepTarget'), 'Not set')} steps",
        f"- Current steps today: {display(ctx.get('currentSteps'), 0)}",
        f"- Remaining steps: {display(ctx.get('remainingSteps'), 'Unknown')}",
        f"- Distance today: {display(ctx.get('distance'), 0)}km",
        f"- Calories burned: {display(ctx.get('caloriesBurned'), 0)}",
        f"- Tracking method: {display(ctx.get('trackingMethod'), 'Manual')}",
        f"- Step streak: {display(ctx.get('stepStreak'), 0)} days",
        f"- Weekly average: {display(ctx.get('weeklyAverage'), 0)} steps",
        f"- Baseline average: {display(ctx.get('baselineAverage'), 'Not set')} steps",
        f"- Stride length: {display(ctx.get('strideLength'), 'Not set')}cm",
        f"- Preferred walking times: {display(walking_times, 'Not set')}",
        f"- Weather adaptive: {'Yes' if ctx.get('weatherAdaptive') else 'No'}",
        f"- Route discovery: {'Enabled' if ctx.get('routeDiscovery') else 'Disabled'}",
    ]
    return "\n".join(lines)


def display(value: Any, default: Any) -> str:
    """Format a context value; numbers get thousands separators."""
    if value is None or value == "":
        value = default
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (int, float)):
        return f"{value:,}"
    return str(value)
