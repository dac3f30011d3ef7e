"""Tests for prompt construction and context formatting."""

from crew_coach.crew.prompts import (
    FIRST_AGENT_MARKER,
    build_agent_prompt,
    build_coordination_prompt,
    display,
    format_context,
)
from crew_coach.crew.registry import get_crew
from crew_coach.models import AgentResponse, GoalDomain, MemoryEntry


def _first(domain: GoalDomain):
    crew = get_crew(domain)
    task = crew.tasks[0]
    return crew.agent_for(task), task


class TestFormatContext:
    def test_sleep_defaults(self):
        text = format_context(GoalDomain.SLEEP_TRACKING, {})
        assert "Target sleep: 8 hours" in text
        assert "Bedtime: Not set" in text
        assert "Tracking method: Manual" in text

    def test_sleep_values(self):
        text = format_context(GoalDomain.SLEEP_TRACKING, {"targetSleepHours": 7.5, "roomTemperature": 67})
        assert "Target sleep: 7.5 hours" in text
        assert "Room temperature: 67°F" in text

    def test_steps_values_use_thousands_separators(self):
        ctx = {"dailyStepTarget": 10000, "currentSteps": 6000, "strideLength": 72,
               "preferredWalkingTimes": ["morning", "lunch"], "weatherAdaptive": True}
        text = format_context(GoalDomain.DAILY_STEPS, ctx)
        assert "Daily target: 10,000 steps" in text
        assert "Current steps today: 6,000" in text
        assert "Stride length: 72cm" in text
        assert "Preferred walking times: morning, lunch" in text
        assert "Weather adaptive: Yes" in text
        assert "Route discovery: Disabled" in text

    def test_steps_defaults(self):
        text = format_context(GoalDomain.DAILY_STEPS, {})
        assert "Daily target: Not set steps" in text
        assert "Remaining steps: Unknown" in text

    def test_display(self):
        assert display(None, "Not set") == "Not set"
        assert display("", 8) == "8"
        assert display(12345, 0) == "12,345"
        assert display(8.0, 0) == "8"
        assert display("22:30", "Not set") == "22:30"


class TestAgentPrompt:
    def test_first_agent_marker_and_profile(self):
        agent, task = _first(GoalDomain.SLEEP_TRACKING)
        prompt = build_agent_prompt(agent, task, "How do I sleep better?", {}, GoalDomain.SLEEP_TRACKING, [], [])
        assert FIRST_AGENT_MARKER in prompt
        assert "# Agent Role: Sleep Quality Analyst" in prompt
        assert "sleep_data_analysis, circadian_rhythm_assessment" in prompt
        assert task.description in prompt
        assert '"How do I sleep better?"' in prompt
        assert "Previous interactions" not in prompt

    def test_prior_outputs_are_concatenated(self):
        agent, task = _first(GoalDomain.DAILY_STEPS)
        prior = [AgentResponse(agent="A", response="first text"), AgentResponse(agent="B", response="second text")]
        prompt = build_agent_prompt(agent, task, "q", {}, GoalDomain.DAILY_STEPS, prior, [])
        assert "first text\n\nsecond text" in prompt
        assert FIRST_AGENT_MARKER not in prompt

    def test_memory_rendered_as_qa_pairs(self):
        agent, task = _first(GoalDomain.SLEEP_TRACKING)
        memory = [MemoryEntry(query="old question", response="old answer")]
        prompt = build_agent_prompt(agent, task, "q", {}, GoalDomain.SLEEP_TRACKING, [], memory)
        assert "Previous interactions with this user:" in prompt
        assert "Q: old question\nA: old answer" in prompt

    def test_braces_in_query_are_kept(self):
        agent, task = _first(GoalDomain.SLEEP_TRACKING)
        prompt = build_agent_prompt(agent, task, "what about {this}?", {}, GoalDomain.SLEEP_TRACKING, [], [])
        assert "what about {this}?" in prompt


class TestCoordinationPrompt:
    def test_includes_every_agent(self):
        results = [
            AgentResponse(agent="Sleep Quality Analyst", response="analysis text", recommendations=["r1"]),
            AgentResponse(agent="Sleep Optimization Coach", response="coach text", recommendations=["r2"]),
        ]
        prompt = build_coordination_prompt(results, "help", GoalDomain.SLEEP_TRACKING)
        assert "sleep tracking assistance team" in prompt
        assert "### Sleep Quality Analyst\nanalysis text" in prompt
        assert "- r1" in prompt and "- r2" in prompt
        assert '"help"' in prompt
