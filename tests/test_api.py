"""Tests for the REST API."""

import pytest
from conftest import ScriptedCompletion
from fastapi.testclient import TestClient

from crew_coach.api.main import app
from crew_coach.api.routes import init_shared_state
from crew_coach.crew.coordinator import CrewCoordinator
from crew_coach.memory.store import MemoryStore


@pytest.fixture
def fallback_client(unconfigured_config):
    init_shared_state(CrewCoordinator(unconfigured_config, memory=MemoryStore()))
    return TestClient(app)


@pytest.fixture
def live_client(configured_config):
    init_shared_state(CrewCoordinator(configured_config, completion=ScriptedCompletion(), memory=MemoryStore()))
    return TestClient(app)


class TestEndpoints:
    def test_health(self, fallback_client):
        assert fallback_client.get("/health").json() == {"status": "ok", "service": "crew-coach"}

    def test_list_crews(self, fallback_client):
        crews = fallback_client.get("/api/crews").json()
        assert {c["domain"] for c in crews} == {"sleep_tracking", "daily_steps"}
        assert all(c["task_count"] == 3 for c in crews)

    def test_execute_fallback(self, fallback_client):
        resp = fallback_client.post(
            "/api/crews/sleep_tracking/execute",
            json={"query": "How can I sleep better?", "context": {"targetSleepHours": 8}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["mode"] == "fallback"
        assert len(body["results"]) == 2

    def test_unknown_domain(self, fallback_client):
        resp = fallback_client.post("/api/crews/weight_loss/execute", json={"query": "q"})
        assert resp.status_code == 404

    def test_memory_roundtrip(self, live_client):
        resp = live_client.post("/api/crews/daily_steps/execute", json={"query": "walk more?"})
        assert resp.json()["mode"] == "live"

        entries = live_client.get("/api/memory/Movement and Walking Coach").json()
        assert len(entries) == 1
        assert entries[0]["query"] == "walk more?"

        assert live_client.delete("/api/memory", params={"role": "Movement and Walking Coach"}).json() == {
            "cleared": "Movement and Walking Coach"
        }
        assert live_client.get("/api/memory/Movement and Walking Coach").json() == []
        assert live_client.delete("/api/memory").json() == {"cleared": "all"}
