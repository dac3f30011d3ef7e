"""Tests for the LLM provider factory."""

import pytest
from conftest import TEST_API_KEY

from crew_coach.config import CrewCoachConfig, LLMConfig
from crew_coach.crew.coordinator import CrewCoordinator
from crew_coach.llm.provider import create_llm
from crew_coach.models import CompletionMode, GoalDomain


class TestCreateLLM:
    def test_openai_client(self):
        config = CrewCoachConfig(llm=LLMConfig(provider="openai", model="gpt-4o-mini", api_key=TEST_API_KEY))
        llm = create_llm(config)
        assert llm.model_name == "gpt-4o-mini"
        assert llm.max_tokens == 800
        assert llm.max_retries == 0

    def test_openai_without_key(self):
        config = CrewCoachConfig(llm=LLMConfig(provider="openai", api_key=None))
        with pytest.raises(ValueError):
            create_llm(config)

    def test_unknown_provider(self):
        config = CrewCoachConfig(llm=LLMConfig(provider="carrier-pigeon", api_key=TEST_API_KEY))
        with pytest.raises(ValueError):
            create_llm(config)


class TestClientConstructionFailure:
    def test_coordinator_falls_back(self):
        config = CrewCoachConfig(llm=LLMConfig(provider="carrier-pigeon", api_key=TEST_API_KEY))
        execution = CrewCoordinator(config).execute(GoalDomain.DAILY_STEPS, "q", {"currentSteps": 6000})
        assert execution.success is True
        assert execution.mode == CompletionMode.FALLBACK
        assert len(execution.results) == 2


class TestOllamaClient:
    def test_timeout_reaches_http_client(self, monkeypatch):
        pytest.importorskip("langchain_ollama")
        from crew_coach.llm import provider

        monkeypatch.setattr(provider, "_is_ollama_available", lambda base_url: True)
        config = CrewCoachConfig(llm=LLMConfig(provider="ollama", model="llama3.1", timeout_seconds=12))
        llm = create_llm(config)
        assert llm.client_kwargs == {"timeout": 12}
