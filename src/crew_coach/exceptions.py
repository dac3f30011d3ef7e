"""Exception types raised inside the crew engine.

None of these escape ``CrewCoordinator.execute``; they mark the boundaries at
which the coordinator and executor substitute fallback content.
"""

from __future__ import annotations


class CrewCoachError(Exception):
    """Base class for crew engine errors."""


class CompletionError(CrewCoachError):
    """The completion capability failed to produce text for a prompt."""


class CrewConfigurationError(CrewCoachError):
    """A crew definition is inconsistent or was requested incorrectly."""


class UnknownGoalDomainError(CrewConfigurationError):
    def __init__(self, domain: object) -> None:
        super().__init__(f"Unknown goal domain: {domain}")
        self.domain = domain


class UnsupportedExecutionModeError(CrewConfigurationError):
    def __init__(self, mode: object) -> None:
        super().__init__(f"Execution mode not implemented: {mode}")
        self.mode = mode
