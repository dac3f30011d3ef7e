"""Crew registry - which agents run, in which order, for each goal domain."""

from __future__ import annotations

from crew_coach.exceptions import UnknownGoalDomainError
from crew_coach.models import (
    AgentDefinition,
    CrewDefinition,
    CrewTask,
    ExecutionMode,
    GoalDomain,
)


# ---------------------------------------------------------------------------
# Sleep tracking
# ---------------------------------------------------------------------------

SLEEP_TRACKING_CREW = CrewDefinition(
    domain=GoalDomain.SLEEP_TRACKING,
    agents={
        "sleep_analyst": AgentDefinition(
            role="Sleep Quality Analyst",
            goal="Analyze sleep patterns, quality metrics, and provide data-driven insights for sleep optimization",
            backstory=(
                "You are a certified sleep specialist with expertise in circadian rhythm science, "
                "sleep hygiene, and sleep disorder recognition. You analyze sleep data to identify "
                "patterns, quality issues, and optimization opportunities."
            ),
            tools=("sleep_data_analysis", "circadian_rhythm_assessment", "sleep_quality_scoring"),
        ),
        "sleep_coach": AgentDefinition(
            role="Sleep Optimization Coach",
            goal="Provide personalized sleep improvement recommendations and behavioral coaching for better sleep habits",
            backstory=(
                "You are a behavioral sleep coach specializing in sleep hygiene, bedtime routines, "
                "and lifestyle modifications for improved sleep. You help users build sustainable "
                "sleep habits through evidence-based interventions."
            ),
            tools=("habit_formation", "environmental_optimization", "routine_planning"),
        ),
        "circadian_specialist": AgentDefinition(
            role="Circadian Rhythm Specialist",
            goal="Optimize sleep-wake cycles, light exposure, and timing recommendations for better circadian health",
            backstory=(
                "You are a chronobiology expert who understands how light, timing, and lifestyle "
                "factors affect circadian rhythms. You provide precise timing recommendations for "
                "sleep, meals, exercise, and light exposure."
            ),
            tools=("light_therapy_planning", "meal_timing_optimization", "chronotype_assessment"),
        ),
    },
    tasks=(
        CrewTask(
            description="Analyze current sleep data and identify patterns, quality issues, and areas for improvement",
            agent="sleep_analyst",
            expected_output="Detailed sleep analysis with quality scores, pattern identification, and specific improvement areas",
        ),
        CrewTask(
            description="Generate personalized sleep optimization recommendations based on analysis",
            agent="sleep_coach",
            expected_output="Actionable sleep improvement plan with specific behavioral modifications and habit changes",
        ),
        CrewTask(
            description="Provide circadian rhythm optimization strategies and timing recommendations",
            agent="circadian_specialist",
            expected_output="Precise timing recommendations for sleep, light exposure, meals, and activities to optimize circadian health",
        ),
    ),
    process=ExecutionMode.SEQUENTIAL,
)


# ---------------------------------------------------------------------------
# Daily steps
# ---------------------------------------------------------------------------

DAILY_STEPS_CREW = CrewDefinition(
    domain=GoalDomain.DAILY_STEPS,
    agents={
        "activity_analyst": AgentDefinition(
            role="Physical Activity Data Analyst",
            goal="Analyze step patterns, activity levels, and movement behaviors to identify optimization opportunities",
            backstory=(
                "You are a kinesiologist and movement specialist who analyzes daily activity patterns. "
                "You understand how step counts relate to overall health, weight management, and "
                "cardiovascular fitness."
            ),
            tools=("activity_pattern_analysis", "movement_behavior_assessment", "health_impact_calculation"),
        ),
        "movement_coach": AgentDefinition(
            role="Movement and Walking Coach",
            goal="Provide personalized strategies to increase daily steps and build sustainable movement habits",
            backstory=(
                "You are a certified exercise physiologist specializing in lifestyle physical activity. "
                "You help people integrate more movement into their daily routines through practical, "
                "achievable strategies."
            ),
            tools=("habit_integration", "route_planning", "motivation_strategies"),
        ),
        "wellness_strategist": AgentDefinition(
            role="Holistic Wellness Strategist",
            goal="Connect daily movement with overall health goals and provide comprehensive wellness recommendations",
            backstory=(
                "You are a wellness expert who understands how daily movement impacts sleep, stress, "
                "energy, weight management, and overall health. You create integrated wellness strategies."
            ),
            tools=("wellness_integration", "goal_alignment", "lifestyle_optimization"),
        ),
    },
    tasks=(
        CrewTask(
            description="Analyze current step patterns, identify barriers to movement, and assess progress toward goals",
            agent="activity_analyst",
            expected_output="Comprehensive activity analysis with pattern identification, barrier assessment, and progress evaluation",
        ),
        CrewTask(
            description="Generate personalized movement strategies and step-increasing recommendations",
            agent="movement_coach",
            expected_output="Practical movement plan with specific strategies to increase daily steps and build walking habits",
        ),
        CrewTask(
            description="Integrate movement recommendations with overall wellness goals and lifestyle factors",
            agent="wellness_strategist",
            expected_output="Holistic wellness strategy connecting daily movement with sleep, nutrition, stress management, and other health goals",
        ),
    ),
    process=ExecutionMode.SEQUENTIAL,
)


_CREWS: dict[GoalDomain, CrewDefinition] = {
    GoalDomain.SLEEP_TRACKING: SLEEP_TRACKING_CREW,
    GoalDomain.DAILY_STEPS: DAILY_STEPS_CREW,
}


def resolve_domain(domain: GoalDomain | str) -> GoalDomain:
    if isinstance(domain, GoalDomain):
        return domain
    try:
        return GoalDomain(domain)
    except ValueError:
        raise UnknownGoalDomainError(domain) from None


def get_crew(domain: GoalDomain | str) -> CrewDefinition:
    """Look up the crew for a goal domain."""
    crew = _CREWS.get(resolve_domain(domain))
    if crew is None:
        raise UnknownGoalDomainError(domain)
    return crew


def available_domains() -> list[GoalDomain]:
    return list(_CREWS)
