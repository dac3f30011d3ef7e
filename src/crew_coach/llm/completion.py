"""Text completion capability used by the crew.

The crew only needs "text in, text out". ``LangChainCompletion`` adapts any
langchain chat model to that shape and turns every failure mode (transport
error, timeout, empty body) into ``CompletionError``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from langchain_core.messages import HumanMessage

from crew_coach.exceptions import CompletionError

logger = logging.getLogger(__name__)


class TextCompletion(Protocol):
    def complete(self, prompt: str) -> str:
        """Return non-empty text for ``prompt`` or raise ``CompletionError``."""
        ...


class LangChainCompletion:
    """Sends one prompt as the sole user message, with no running history."""

    def __init__(self, llm: Any) -> None:
        self._llm = llm

    def complete(self, prompt: str) -> str:
        try:
            response = self._llm.invoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise CompletionError(f"LLM call failed: {e}") from e

        content = getattr(response, "content", response)
        if isinstance(content, list):
            # Content blocks (anthropic style)
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        if not isinstance(content, str) or not content.strip():
            raise CompletionError("LLM returned an empty response")
        return content
