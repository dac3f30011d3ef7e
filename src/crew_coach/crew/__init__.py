"""Sequential multi-agent crews for goal-specific coaching."""

from crew_coach.crew.coordinator import CrewCoordinator, LiveCrewRunner
from crew_coach.crew.executor import AgentTaskExecutor
from crew_coach.crew.fallback import FallbackEngine
from crew_coach.crew.registry import available_domains, get_crew

__all__ = [
    "AgentTaskExecutor",
    "CrewCoordinator",
    "FallbackEngine",
    "LiveCrewRunner",
    "available_domains",
    "get_crew",
]
