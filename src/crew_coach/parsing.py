"""Best-effort extraction of labeled sections from agent output.

Agents are asked to answer with bolded headings followed by bullet lists:

    **Recommendations**:
    - Keep the bedroom at 65-68F
    - Stop caffeine after 2 PM

Model output rarely follows that exactly, so this module never raises: a
missing heading, or a heading followed by prose, yields an empty list and the
raw text stays available to the caller.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

BULLET_MARKERS = ("-", "•", "*")
ACTION_ITEM_SUBSTITUTES = 3


class HeadingVocabulary(BaseModel):
    """Heading phrases (case-sensitive substrings) and look-ahead windows."""

    model_config = ConfigDict(frozen=True)

    recommendations: tuple[str, ...] = ("**Recommendations**:", "**Recommendation", "Recommendations:")
    insights: tuple[str, ...] = ("**Insights**:", "**Insight", "Insights:")
    next_steps: tuple[str, ...] = ("**Next Steps**:", "Next Steps:")
    action_items: tuple[str, ...] = ("**Action", "Action Items:")
    recommendations_window: int = 5
    insights_window: int = 3
    next_steps_window: int = 3


DEFAULT_VOCABULARY = HeadingVocabulary()


class ParsedSections(BaseModel):
    recommendations: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)


def parse_agent_response(text: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY) -> ParsedSections:
    """Split free-form agent text into recommendations, insights and next steps.

    A later heading of the same kind replaces an earlier one only when it is
    followed by bullet lines. Action items fall back to the first three
    recommendations when no action heading is present.
    """
    lines = [line for line in (text or "").splitlines() if line.strip()]
    sections = ParsedSections()
    found_action_heading = False

    for idx, line in enumerate(lines):
        if _matches(line, vocabulary.recommendations):
            items = _bullets_after(lines, idx, vocabulary.recommendations_window)
            if items or not sections.recommendations:
                sections.recommendations = items
        elif _matches(line, vocabulary.insights):
            items = _bullets_after(lines, idx, vocabulary.insights_window)
            if items or not sections.insights:
                sections.insights = items
        elif _matches(line, vocabulary.action_items):
            items = _bullets_after(lines, idx, vocabulary.next_steps_window)
            found_action_heading = True
            if items or not sections.action_items:
                sections.action_items = items
            if items or not sections.next_steps:
                sections.next_steps = list(items)
        elif _matches(line, vocabulary.next_steps):
            items = _bullets_after(lines, idx, vocabulary.next_steps_window)
            if items or not sections.next_steps:
                sections.next_steps = items

    if not found_action_heading:
        sections.action_items = sections.recommendations[:ACTION_ITEM_SUBSTITUTES]

    logger.debug(
        f"Parsed sections: {len(sections.recommendations)} recommendations, "
        f"{len(sections.insights)} insights, {len(sections.next_steps)} next steps"
    )
    return sections


def strip_bullet(line: str) -> str | None:
    """Return the bullet text without its marker, or None if not a bullet line."""
    stripped = line.strip()
    if not stripped:
        return None
    marker = stripped[0]
    if marker not in BULLET_MARKERS:
        return None
    # "**Heading**" is bold markup, not a "*" bullet
    if marker == "*" and stripped.startswith("**"):
        return None
    return stripped[1:].strip()


def _matches(line: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in line for phrase in phrases)


def _bullets_after(lines: list[str], idx: int, window: int) -> list[str]:
    """Collect the contiguous bullet lines within ``window`` lines after ``idx``."""
    items: list[str] = []
    for candidate in lines[idx + 1: idx + 1 + window]:
        text = strip_bullet(candidate)
        if text is None:
            break
        if text:
            items.append(text)
    return items
