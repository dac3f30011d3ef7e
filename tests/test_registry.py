"""Tests for the crew registry and crew definitions."""

import pytest

from crew_coach.crew.registry import available_domains, get_crew, resolve_domain
from crew_coach.exceptions import CrewConfigurationError, UnknownGoalDomainError
from crew_coach.models import CrewTask, ExecutionMode, GoalDomain


class TestRegistry:
    def test_sleep_crew_order(self):
        crew = get_crew(GoalDomain.SLEEP_TRACKING)
        assert crew.roles == [
            "Sleep Quality Analyst",
            "Sleep Optimization Coach",
            "Circadian Rhythm Specialist",
        ]

    def test_steps_crew_order(self):
        crew = get_crew("daily_steps")
        assert crew.roles == [
            "Physical Activity Data Analyst",
            "Movement and Walking Coach",
            "Holistic Wellness Strategist",
        ]

    def test_all_crews_are_sequential(self):
        for domain in available_domains():
            assert get_crew(domain).process == ExecutionMode.SEQUENTIAL

    def test_unknown_domain(self):
        with pytest.raises(UnknownGoalDomainError):
            get_crew("weight_loss")

    def test_resolve_domain_accepts_strings(self):
        assert resolve_domain("sleep_tracking") is GoalDomain.SLEEP_TRACKING

    def test_every_task_has_an_agent(self):
        for domain in available_domains():
            crew = get_crew(domain)
            for task in crew.tasks:
                assert crew.agent_for(task).role

    def test_definitions_are_frozen(self):
        crew = get_crew(GoalDomain.SLEEP_TRACKING)
        with pytest.raises(Exception):
            crew.process = ExecutionMode.HIERARCHICAL

    def test_agent_for_unknown_key(self):
        crew = get_crew(GoalDomain.SLEEP_TRACKING)
        task = CrewTask(description="orphan", agent="missing", expected_output="none")
        with pytest.raises(CrewConfigurationError):
            crew.agent_for(task)
