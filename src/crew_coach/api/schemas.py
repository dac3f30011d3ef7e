"""API request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ExecuteRequest(BaseModel):
    query: str
    context: dict[str, Any] = Field(default_factory=dict)


class CrewSummary(BaseModel):
    domain: str
    process: str
    roles: list[str] = []
    task_count: int = 0


class ClearMemoryResponse(BaseModel):
    cleared: str
