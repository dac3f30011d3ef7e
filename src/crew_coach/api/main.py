"""FastAPI application entry point for Crew Coach."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crew_coach.api.routes import init_shared_state, router
from crew_coach.config import CrewCoachConfig
from crew_coach.crew.coordinator import CrewCoordinator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — one coordinator (and agent memory) per process."""
    config = CrewCoachConfig.from_env()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    init_shared_state(CrewCoordinator(config))
    logger.info("Crew Coach API started")

    yield

    logger.info("Crew Coach API shut down")


app = FastAPI(
    title="Crew Coach API",
    description="Multi-agent sleep and activity coaching",
    version="0.1.0",
    lifespan=lifespan,
)

_cors_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
]
_extra_origin = os.getenv("CORS_ORIGIN")
if _extra_origin:
    _cors_origins.append(_extra_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "service": "crew-coach"}
