"""Crew Coach configuration - Pydantic-based with environment variable support."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

PLACEHOLDER_API_KEY = "your_openai_api_key_here"
MIN_API_KEY_LENGTH = 21

# Providers that run without a credential
_KEYLESS_PROVIDERS = ("ollama",)


class LLMConfig(BaseModel):
    provider: str = Field(default_factory=lambda: os.getenv("LLM_PROVIDER", "openai"))
    model: str = Field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    temperature: float = 0.7
    max_tokens: int = Field(default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "800")))
    timeout_seconds: float = Field(default_factory=lambda: float(os.getenv("LLM_TIMEOUT_SECONDS", "30")))
    base_url: Optional[str] = Field(default_factory=lambda: os.getenv("LLM_BASE_URL"))
    api_key: Optional[str] = Field(default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY"))

    @property
    def is_configured(self) -> bool:
        """True when a usable credential is present for the provider."""
        if self.provider.lower() in _KEYLESS_PROVIDERS:
            return True
        key = (self.api_key or "").strip()
        if not key or key == PLACEHOLDER_API_KEY:
            return False
        return len(key) >= MIN_API_KEY_LENGTH


class CrewSettings(BaseModel):
    memory_capacity: int = 10
    memory_excerpt: int = 3
    fallback_execution_time_ms: float = 500.0


class CrewCoachConfig(BaseModel):
    llm: LLMConfig = Field(default_factory=LLMConfig)
    crew: CrewSettings = Field(default_factory=CrewSettings)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls) -> CrewCoachConfig:
        return cls()
