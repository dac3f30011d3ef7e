"""FastAPI REST endpoints."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from fastapi import APIRouter, HTTPException

from crew_coach.api.schemas import ClearMemoryResponse, CrewSummary, ExecuteRequest
from crew_coach.crew.coordinator import CrewCoordinator
from crew_coach.crew.registry import available_domains, get_crew, resolve_domain
from crew_coach.exceptions import UnknownGoalDomainError
from crew_coach.models import CrewExecution, GoalDomain, MemoryEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Shared state — initialized in main.py lifespan
_coordinator: CrewCoordinator | None = None
_executor = ThreadPoolExecutor(max_workers=4)


def init_shared_state(coordinator: CrewCoordinator) -> None:
    global _coordinator
    _coordinator = coordinator


def get_coordinator() -> CrewCoordinator:
    if _coordinator is None:
        raise HTTPException(status_code=503, detail="Crew coordinator not initialized")
    return _coordinator


def _resolve(domain: str) -> GoalDomain:
    try:
        return resolve_domain(domain)
    except UnknownGoalDomainError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# ---------------------------------------------------------------------------
# REST Endpoints
# ---------------------------------------------------------------------------


@router.get("/crews", response_model=list[CrewSummary])
async def list_crews() -> list[CrewSummary]:
    summaries = []
    for domain in available_domains():
        crew = get_crew(domain)
        summaries.append(CrewSummary(
            domain=domain.value,
            process=crew.process.value,
            roles=crew.roles,
            task_count=len(crew.tasks),
        ))
    return summaries


@router.post("/crews/{domain}/execute", response_model=CrewExecution)
async def execute_crew(domain: str, req: ExecuteRequest) -> CrewExecution:
    """Run a crew. Completion calls block, so the run happens in a worker thread."""
    goal = _resolve(domain)
    coordinator = get_coordinator()
    loop = asyncio.get_running_loop()
    logger.info(f"Executing {goal.value} crew")
    return await loop.run_in_executor(_executor, coordinator.execute, goal, req.query, req.context)


@router.get("/memory/{role}", response_model=list[MemoryEntry])
async def get_memory(role: str) -> list[MemoryEntry]:
    return get_coordinator().get_memory(role)


@router.delete("/memory", response_model=ClearMemoryResponse)
async def clear_memory(role: Optional[str] = None) -> ClearMemoryResponse:
    get_coordinator().clear_memory(role)
    return ClearMemoryResponse(cleared=role or "all")
